from __future__ import annotations

from decimal import Decimal

import pytest

from src.claims_system.claims_system.automation.service import (
    AUTO_APPROVED,
    AUTO_REJECTED,
    ERRORS_AFTER_REVIEW,
    FLAGGED_FOR_REVIEW,
    ClaimAutomationService,
)
from src.claims_system.claims_system.claims.validation import ClaimValidator
from src.claims_system.claims_system.core.enums import ClaimStatus
from src.claims_system.claims_system.core.exceptions import NotFoundError, PersistenceError
from tests.fakes import InMemoryClaims, InMemoryLecturers, RecordingNotifier, make_claim, make_lecturer


def _service(*claims, rate="50", notifier=None):
    repo = InMemoryClaims(*claims)
    lecturers = InMemoryLecturers(make_lecturer(1, rate=rate))
    notifier = notifier or RecordingNotifier()
    return ClaimAutomationService(repo, ClaimValidator(lecturers), notifier), repo, notifier


def test_small_clean_claim_is_auto_approved():
    service, repo, notifier = _service(make_claim(1, hours=100, rate="50", reason="left over"))

    result = service.auto_verify(1)

    assert result.action_taken == AUTO_APPROVED
    stored = repo.get_by_id(1)
    assert stored.status == ClaimStatus.APPROVED_BY_COORDINATOR
    assert stored.rejection_reason is None
    assert stored.total_amount == Decimal("5000")
    assert notifier.sent == [(1, "auto-approved")]


def test_claim_with_errors_is_auto_rejected_with_joined_reason():
    service, repo, notifier = _service(make_claim(1, hours=250, rate="50", total="1"))

    result = service.auto_verify(1)

    assert result.action_taken == AUTO_REJECTED
    stored = repo.get_by_id(1)
    assert stored.status == ClaimStatus.REJECTED_BY_COORDINATOR
    assert stored.rejection_reason == (
        "Automatic rejection: Hours worked (250) must be between 1 and 200; "
        "Total amount mismatch. Expected: R12,500.00, Got: R1.00"
    )
    assert notifier.sent == [(1, "auto-rejected")]


def test_pending_claim_with_errors_is_rejected():
    service, repo, _ = _service(make_claim(1, hours=0, status=ClaimStatus.PENDING))

    assert service.auto_verify(1).action_taken == AUTO_REJECTED
    assert repo.get_by_id(1).status == ClaimStatus.REJECTED_BY_COORDINATOR


def test_claim_with_only_warnings_is_flagged_and_left_alone():
    service, repo, notifier = _service(make_claim(1, hours=170, rate="50"))

    result = service.auto_verify(1)

    assert result.action_taken == FLAGGED_FOR_REVIEW
    assert repo.get_by_id(1).status == ClaimStatus.SUBMITTED
    assert repo.saves == 0
    assert notifier.sent == []


def test_valid_claim_over_threshold_gets_no_action():
    service, repo, _ = _service(make_claim(1, hours=150, rate="100"), rate="100")

    result = service.auto_verify(1)

    assert result.is_valid
    assert result.action_taken is None
    assert repo.get_by_id(1).status == ClaimStatus.SUBMITTED


def test_eligible_pending_claim_is_not_auto_approved():
    service, repo, _ = _service(make_claim(1, status=ClaimStatus.PENDING))

    result = service.auto_verify(1)

    assert result.can_auto_approve is True
    assert result.action_taken is None
    assert repo.get_by_id(1).status == ClaimStatus.PENDING


def test_errors_on_reviewed_claim_do_not_change_status():
    service, repo, notifier = _service(make_claim(1, hours=250, status=ClaimStatus.APPROVED_BY_COORDINATOR))

    result = service.auto_verify(1)

    assert result.action_taken == ERRORS_AFTER_REVIEW
    assert repo.get_by_id(1).status == ClaimStatus.APPROVED_BY_COORDINATOR
    assert notifier.sent == []


def test_duplicate_is_detected_against_stored_claims():
    service, repo, _ = _service(make_claim(1), make_claim(2))

    result = service.auto_verify(2)

    assert result.errors == ["Duplicate claim found for January 2026. Claim #1 already exists."]
    assert repo.get_by_id(2).status == ClaimStatus.REJECTED_BY_COORDINATOR
    assert repo.get_by_id(1).status == ClaimStatus.SUBMITTED


def test_unknown_claim_raises_not_found():
    service, _, _ = _service()
    with pytest.raises(NotFoundError):
        service.auto_verify(99)


def test_notification_failure_does_not_fail_the_decision():
    service, repo, _ = _service(make_claim(1), notifier=RecordingNotifier(fail=True))

    assert service.auto_verify(1).action_taken == AUTO_APPROVED
    assert repo.get_by_id(1).status == ClaimStatus.APPROVED_BY_COORDINATOR


def test_persistence_failure_propagates_and_leaves_claim_untouched():
    original = make_claim(1)
    service, repo, notifier = _service(original)
    repo.fail_saves = True

    with pytest.raises(PersistenceError):
        service.auto_verify(1)

    assert repo.get_by_id(1) == original
    assert original.status == ClaimStatus.SUBMITTED
    assert notifier.sent == []


def test_validate_does_not_persist_anything():
    service, repo, _ = _service(make_claim(1, hours=250))

    result = service.validate(repo.get_by_id(1))

    assert not result.is_valid
    assert result.action_taken is None
    assert repo.saves == 0
