from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import ClaimStatus
from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Claim, NewClaim
from .repository import ClaimRepository

_COLUMNS = """
    claim_id, lecturer_id, module_name, month, hours_worked, hourly_rate,
    total_amount, status, submission_date, supporting_document, rejection_reason
"""


def _to_claim(row: Dict[str, Any]) -> Claim:
    return Claim(
        claim_id=int(row["claim_id"]),
        lecturer_id=int(row["lecturer_id"]),
        module_name=row.get("module_name"),
        month=row["month"],
        hours_worked=int(row["hours_worked"]),
        hourly_rate=Decimal(str(row["hourly_rate"])),
        total_amount=Decimal(str(row["total_amount"])),
        status=ClaimStatus(row["status"]),
        submission_date=row["submission_date"],
        supporting_document=row.get("supporting_document"),
        rejection_reason=row.get("rejection_reason"),
    )


class MySQLClaimRepository(ClaimRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, claim_id: int) -> Optional[Claim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM claims WHERE claim_id=%s", (int(claim_id),))
            row = fetchone(cur)
            return _to_claim(row) if row else None

    def find_by_lecturer_and_month(
        self,
        lecturer_id: int,
        month: str,
        *,
        exclude_id: Optional[int] = None,
    ) -> Sequence[Claim]:
        clauses = ["lecturer_id=%s", "month=%s"]
        params: list[object] = [int(lecturer_id), month]
        if exclude_id is not None:
            clauses.append("claim_id<>%s")
            params.append(int(exclude_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM claims WHERE {where} ORDER BY claim_id",
                tuple(params),
            )
            return [_to_claim(r) for r in fetchall(cur)]

    def list_by_status(self, statuses: Iterable[ClaimStatus]) -> Sequence[Claim]:
        values = [s.value for s in statuses]
        if not values:
            return []

        placeholders = ",".join(["%s"] * len(values))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM claims
                WHERE status IN ({placeholders})
                ORDER BY submission_date ASC, claim_id ASC
                """,
                tuple(values),
            )
            return [_to_claim(r) for r in fetchall(cur)]

    def list_by_lecturer(self, lecturer_id: int) -> Sequence[Claim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM claims WHERE lecturer_id=%s ORDER BY submission_date DESC",
                (int(lecturer_id),),
            )
            return [_to_claim(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Claim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM claims ORDER BY submission_date DESC")
            return [_to_claim(r) for r in fetchall(cur)]

    def create(self, claim: NewClaim) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO claims(
                    lecturer_id, module_name, month, hours_worked, hourly_rate,
                    total_amount, status, submission_date, supporting_document
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(claim.lecturer_id),
                    claim.module_name,
                    claim.month,
                    int(claim.hours_worked),
                    claim.hourly_rate,
                    claim.total_amount,
                    claim.status.value,
                    claim.submission_date,
                    claim.supporting_document,
                ),
            )
            return int(cur.lastrowid)

    @staticmethod
    def _update(cur, claim: Claim) -> None:
        cur.execute(
            "UPDATE claims SET status=%s, rejection_reason=%s WHERE claim_id=%s",
            (claim.status.value, claim.rejection_reason, int(claim.claim_id)),
        )
        if cur.rowcount == 0:
            raise PersistenceError(f"Claim #{claim.claim_id} no longer exists")

    def save(self, claim: Claim) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            self._update(cur, claim)

    def save_many(self, claims: Sequence[Claim]) -> None:
        # One connection, one commit: db_cursor rolls back if any row fails.
        with db_cursor(self._conn_factory) as (_, cur):
            for claim in claims:
                self._update(cur, claim)

    def delete(self, claim_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM claims WHERE claim_id=%s", (int(claim_id),))
            return cur.rowcount > 0
