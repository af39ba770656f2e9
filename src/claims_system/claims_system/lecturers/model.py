from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Lecturer:
    """Domain entity: Lecturer.

    Holds the authoritative hourly rate that claims are checked against.
    """

    lecturer_id: int
    full_name: str
    email: str
    module_name: str
    hourly_rate: Decimal

    def to_dict(self) -> dict:
        return {
            "lecturer_id": self.lecturer_id,
            "full_name": self.full_name,
            "email": self.email,
            "module_name": self.module_name,
            "hourly_rate": str(self.hourly_rate),
        }
