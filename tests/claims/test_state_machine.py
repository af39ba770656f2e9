from __future__ import annotations

import pytest

from src.claims_system.claims_system.claims.state_machine import ClaimStateMachine
from src.claims_system.claims_system.core.enums import ClaimAction, ClaimStatus, Role
from src.claims_system.claims_system.core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    ValidationError,
)
from tests.fakes import make_claim


@pytest.fixture
def machine():
    return ClaimStateMachine()


@pytest.mark.parametrize(
    "status, action, role, target",
    [
        (ClaimStatus.SUBMITTED, ClaimAction.APPROVE, Role.COORDINATOR, ClaimStatus.APPROVED_BY_COORDINATOR),
        (ClaimStatus.PENDING, ClaimAction.APPROVE, Role.COORDINATOR, ClaimStatus.APPROVED_BY_COORDINATOR),
        (ClaimStatus.SUBMITTED, ClaimAction.APPROVE, Role.SYSTEM, ClaimStatus.APPROVED_BY_COORDINATOR),
        (ClaimStatus.APPROVED_BY_COORDINATOR, ClaimAction.VERIFY, Role.MANAGER, ClaimStatus.APPROVED_BY_MANAGER),
        (ClaimStatus.APPROVED_BY_MANAGER, ClaimAction.PAY, Role.HR, ClaimStatus.PAYMENT_PROCESSED),
    ],
)
def test_legal_transitions(machine, status, action, role, target):
    updated = machine.apply(make_claim(status=status), action, role)
    assert updated.status == target
    assert updated.rejection_reason is None


@pytest.mark.parametrize(
    "status, role, target",
    [
        (ClaimStatus.SUBMITTED, Role.COORDINATOR, ClaimStatus.REJECTED_BY_COORDINATOR),
        (ClaimStatus.PENDING, Role.SYSTEM, ClaimStatus.REJECTED_BY_COORDINATOR),
        (ClaimStatus.APPROVED_BY_COORDINATOR, Role.MANAGER, ClaimStatus.REJECTED_BY_MANAGER),
    ],
)
def test_rejection_records_reason(machine, status, role, target):
    updated = machine.apply(make_claim(status=status), ClaimAction.REJECT, role, reason="  Hours not signed off  ")
    assert updated.status == target
    assert updated.rejection_reason == "Hours not signed off"


@pytest.mark.parametrize("reason", [None, "", "   "])
def test_rejection_requires_reason(machine, reason):
    with pytest.raises(ValidationError, match="reason for rejection"):
        machine.apply(make_claim(), ClaimAction.REJECT, Role.COORDINATOR, reason=reason)


def test_approval_clears_a_stale_reason(machine):
    claim = make_claim(status=ClaimStatus.SUBMITTED, reason="old note")
    assert machine.apply(claim, ClaimAction.APPROVE, Role.COORDINATOR).rejection_reason is None


@pytest.mark.parametrize(
    "status, action",
    [
        (ClaimStatus.SUBMITTED, ClaimAction.VERIFY),
        (ClaimStatus.SUBMITTED, ClaimAction.PAY),
        (ClaimStatus.APPROVED_BY_COORDINATOR, ClaimAction.APPROVE),
        (ClaimStatus.APPROVED_BY_MANAGER, ClaimAction.REJECT),
        (ClaimStatus.REJECTED_BY_COORDINATOR, ClaimAction.APPROVE),
        (ClaimStatus.PAYMENT_PROCESSED, ClaimAction.PAY),
    ],
)
def test_illegal_transitions(machine, status, action):
    with pytest.raises(InvalidTransitionError):
        machine.apply(make_claim(status=status), action, Role.HR, reason="x")


@pytest.mark.parametrize(
    "status, action, role",
    [
        (ClaimStatus.SUBMITTED, ClaimAction.APPROVE, Role.MANAGER),
        (ClaimStatus.SUBMITTED, ClaimAction.APPROVE, Role.LECTURER),
        (ClaimStatus.APPROVED_BY_COORDINATOR, ClaimAction.VERIFY, Role.COORDINATOR),
        (ClaimStatus.APPROVED_BY_COORDINATOR, ClaimAction.REJECT, Role.SYSTEM),
        (ClaimStatus.APPROVED_BY_MANAGER, ClaimAction.PAY, Role.MANAGER),
    ],
)
def test_wrong_role_is_denied(machine, status, action, role):
    with pytest.raises(AuthorizationError):
        machine.apply(make_claim(status=status), action, role, reason="x")


def test_apply_never_mutates_input(machine):
    claim = make_claim()
    machine.apply(claim, ClaimAction.APPROVE, Role.COORDINATOR)
    with pytest.raises(ValidationError):
        machine.apply(claim, ClaimAction.REJECT, Role.COORDINATOR, reason="")

    assert claim.status == ClaimStatus.SUBMITTED
    assert claim.rejection_reason is None


def test_allowed_actions(machine):
    assert machine.allowed_actions(make_claim(), Role.COORDINATOR) == [ClaimAction.APPROVE, ClaimAction.REJECT]
    assert machine.allowed_actions(make_claim(status=ClaimStatus.APPROVED_BY_MANAGER), Role.HR) == [ClaimAction.PAY]
    assert machine.allowed_actions(make_claim(status=ClaimStatus.PAYMENT_PROCESSED), Role.HR) == []


@pytest.mark.parametrize(
    "role, status, allowed",
    [
        (Role.LECTURER, ClaimStatus.SUBMITTED, True),
        (Role.LECTURER, ClaimStatus.PENDING, False),
        (Role.LECTURER, ClaimStatus.APPROVED_BY_COORDINATOR, False),
        (Role.COORDINATOR, ClaimStatus.SUBMITTED, True),
        (Role.COORDINATOR, ClaimStatus.PENDING, True),
        (Role.COORDINATOR, ClaimStatus.REJECTED_BY_COORDINATOR, False),
        (Role.COORDINATOR, ClaimStatus.APPROVED_BY_MANAGER, False),
        (Role.COORDINATOR, ClaimStatus.PAYMENT_PROCESSED, False),
        (Role.MANAGER, ClaimStatus.APPROVED_BY_COORDINATOR, True),
        (Role.MANAGER, ClaimStatus.REJECTED_BY_MANAGER, True),
        (Role.MANAGER, ClaimStatus.SUBMITTED, False),
        (Role.HR, ClaimStatus.APPROVED_BY_MANAGER, False),
        (Role.HR, ClaimStatus.PAYMENT_PROCESSED, False),
    ],
)
def test_delete_permissions(machine, role, status, allowed):
    claim = make_claim(status=status)
    assert machine.can_delete(claim, role) is allowed
    if not allowed:
        with pytest.raises(AuthorizationError):
            machine.ensure_can_delete(claim, role)
