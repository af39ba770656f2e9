from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Lecturer
from .repository import LecturerRepository

_COLUMNS = "lecturer_id, full_name, email, module_name, hourly_rate"


def _to_lecturer(row: Dict[str, Any]) -> Lecturer:
    return Lecturer(
        lecturer_id=int(row["lecturer_id"]),
        full_name=row["full_name"],
        email=row["email"],
        module_name=row["module_name"],
        hourly_rate=Decimal(str(row["hourly_rate"])),
    )


class MySQLLecturerRepository(LecturerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, lecturer_id: int) -> Optional[Lecturer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM lecturers WHERE lecturer_id=%s", (int(lecturer_id),))
            row = fetchone(cur)
            return _to_lecturer(row) if row else None

    def list_all(self) -> Sequence[Lecturer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM lecturers ORDER BY full_name")
            return [_to_lecturer(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        full_name: str,
        email: str,
        module_name: str,
        hourly_rate: Decimal,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO lecturers(full_name, email, module_name, hourly_rate)
                VALUES(%s,%s,%s,%s)
                """,
                (full_name, email, module_name, hourly_rate),
            )
            return int(cur.lastrowid)

    def update(self, lecturer: Lecturer) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE lecturers
                SET full_name=%s, email=%s, module_name=%s, hourly_rate=%s
                WHERE lecturer_id=%s
                """,
                (
                    lecturer.full_name,
                    lecturer.email,
                    lecturer.module_name,
                    lecturer.hourly_rate,
                    int(lecturer.lecturer_id),
                ),
            )
            return cur.rowcount > 0
