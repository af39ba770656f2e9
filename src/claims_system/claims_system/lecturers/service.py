from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional, Sequence

from ..common.money import to_money
from ..common.validators import require_decimal_between, require_email, require_non_empty
from ..core.constants import MAX_HOURLY_RATE, MIN_HOURLY_RATE
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.logging import get_logger
from .model import Lecturer
from .repository import LecturerRepository

logger = get_logger(__name__)


class LecturerService:
    """Use case: HR maintains the lecturer register (names, modules, rates)."""

    def __init__(self, lecturers: LecturerRepository):
        self._lecturers = lecturers

    @staticmethod
    def _require_hr(current_role: Role) -> None:
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can manage lecturers")

    def list_lecturers(self) -> Sequence[Lecturer]:
        return self._lecturers.list_all()

    def get_lecturer(self, lecturer_id: int) -> Lecturer:
        lecturer = self._lecturers.get_by_id(int(lecturer_id))
        if not lecturer:
            raise NotFoundError(f"Lecturer #{lecturer_id} not found")
        return lecturer

    def add_lecturer(
        self,
        *,
        current_role: Role,
        full_name: str,
        email: str,
        module_name: str,
        hourly_rate: Any,
    ) -> int:
        self._require_hr(current_role)

        lecturer_id = self._lecturers.create(
            full_name=require_non_empty(full_name, "Full name"),
            email=require_email(email),
            module_name=require_non_empty(module_name, "Module name"),
            hourly_rate=to_money(require_decimal_between(hourly_rate, "Hourly rate", MIN_HOURLY_RATE, MAX_HOURLY_RATE)),
        )
        logger.info("lecturer_added", lecturer_id=lecturer_id)
        return lecturer_id

    def update_lecturer(
        self,
        *,
        current_role: Role,
        lecturer_id: int,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
        module_name: Optional[str] = None,
        hourly_rate: Any = None,
    ) -> Lecturer:
        """Apply the given field changes; ``None`` leaves a field as it is.

        Rate changes only affect future submissions: existing claims keep the
        rate snapshotted when they were submitted.
        """

        self._require_hr(current_role)
        current = self.get_lecturer(lecturer_id)

        changes: dict[str, Any] = {}
        if full_name is not None:
            changes["full_name"] = require_non_empty(full_name, "Full name")
        if email is not None:
            changes["email"] = require_email(email)
        if module_name is not None:
            changes["module_name"] = require_non_empty(module_name, "Module name")
        if hourly_rate is not None:
            changes["hourly_rate"] = to_money(
                require_decimal_between(hourly_rate, "Hourly rate", MIN_HOURLY_RATE, MAX_HOURLY_RATE)
            )

        updated = replace(current, **changes)
        if not self._lecturers.update(updated):
            raise ValidationError("Updating lecturer failed")

        logger.info("lecturer_updated", lecturer_id=updated.lecturer_id, fields=sorted(changes))
        return updated
