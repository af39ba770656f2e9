from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Lecturer


class LecturerLookup(Protocol):
    """Read-only view used by claim validation and notifications."""

    def get_by_id(self, lecturer_id: int) -> Optional[Lecturer]:
        raise NotImplementedError


class LecturerRepository(LecturerLookup, Protocol):
    """Repository interface for Lecturer.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def list_all(self) -> Sequence[Lecturer]:
        raise NotImplementedError

    def create(
        self,
        *,
        full_name: str,
        email: str,
        module_name: str,
        hourly_rate: Decimal,
    ) -> int:
        raise NotImplementedError

    def update(self, lecturer: Lecturer) -> bool:
        raise NotImplementedError
