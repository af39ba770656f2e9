from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import ClaimStatus
from .model import Claim, NewClaim


class ClaimRepository(Protocol):
    def get_by_id(self, claim_id: int) -> Optional[Claim]:
        raise NotImplementedError

    def find_by_lecturer_and_month(
        self,
        lecturer_id: int,
        month: str,
        *,
        exclude_id: Optional[int] = None,
    ) -> Sequence[Claim]:
        """All claims of a lecturer whose month label matches exactly, any status."""

        raise NotImplementedError

    def list_by_status(self, statuses: Iterable[ClaimStatus]) -> Sequence[Claim]:
        """Claims in any of ``statuses``, oldest submission first."""

        raise NotImplementedError

    def list_by_lecturer(self, lecturer_id: int) -> Sequence[Claim]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Claim]:
        raise NotImplementedError

    def create(self, claim: NewClaim) -> int:
        raise NotImplementedError

    def save(self, claim: Claim) -> None:
        """Persist status and rejection reason of an existing claim."""

        raise NotImplementedError

    def save_many(self, claims: Sequence[Claim]) -> None:
        """Persist several claims in one unit of work: all or none."""

        raise NotImplementedError

    def delete(self, claim_id: int) -> bool:
        raise NotImplementedError
