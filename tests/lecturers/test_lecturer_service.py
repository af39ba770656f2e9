from __future__ import annotations

from decimal import Decimal

import pytest

from src.claims_system.claims_system.core.enums import Role
from src.claims_system.claims_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.claims_system.claims_system.lecturers.service import LecturerService
from tests.fakes import InMemoryLecturers, make_lecturer


def test_hr_adds_lecturer_with_rounded_rate():
    repo = InMemoryLecturers()
    service = LecturerService(repo)

    lecturer_id = service.add_lecturer(
        current_role=Role.HR,
        full_name=" Naledi Mokoena ",
        email="naledi@example.edu",
        module_name="PROG7311",
        hourly_rate="420.555",
    )

    lecturer = service.get_lecturer(lecturer_id)
    assert lecturer.full_name == "Naledi Mokoena"
    assert lecturer.hourly_rate == Decimal("420.56")


@pytest.mark.parametrize(
    "field, value",
    [
        ("full_name", ""),
        ("email", "not-an-email"),
        ("module_name", "   "),
        ("hourly_rate", "0"),
        ("hourly_rate", "1000.01"),
        ("hourly_rate", "abc"),
    ],
)
def test_add_lecturer_validates_fields(field, value):
    service = LecturerService(InMemoryLecturers())
    kwargs = dict(full_name="A B", email="a@b.edu", module_name="PROG6212", hourly_rate="100")
    kwargs[field] = value

    with pytest.raises(ValidationError):
        service.add_lecturer(current_role=Role.HR, **kwargs)


def test_only_hr_manages_lecturers():
    service = LecturerService(InMemoryLecturers(make_lecturer(1)))

    with pytest.raises(AuthorizationError):
        service.add_lecturer(
            current_role=Role.MANAGER, full_name="A B", email="a@b.edu", module_name="M", hourly_rate="10"
        )
    with pytest.raises(AuthorizationError):
        service.update_lecturer(current_role=Role.COORDINATOR, lecturer_id=1, hourly_rate="60")


def test_update_changes_only_given_fields():
    repo = InMemoryLecturers(make_lecturer(1, rate="50", name="Thabo Nkosi"))
    service = LecturerService(repo)

    updated = service.update_lecturer(current_role=Role.HR, lecturer_id=1, hourly_rate="65")

    assert updated.hourly_rate == Decimal("65.00")
    assert updated.full_name == "Thabo Nkosi"
    assert repo.get_by_id(1) == updated


def test_update_unknown_lecturer():
    service = LecturerService(InMemoryLecturers())
    with pytest.raises(NotFoundError):
        service.update_lecturer(current_role=Role.HR, lecturer_id=3, full_name="X")
