from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from src.claims_system.claims_system.core.enums import ClaimStatus, Role
from src.claims_system.claims_system.reporting.service import ClaimReportService
from src.claims_system.claims_system.reporting.statistics import STATUS_BUCKETS, build_statistics
from tests.fakes import SUBMITTED_AT, InMemoryClaims, InMemoryLecturers, make_claim, make_lecturer

NOW = datetime(2026, 3, 1, 8, 0, 0)


def _mixed_claims():
    return [
        make_claim(1, hours=10, month="January 2026", status=ClaimStatus.SUBMITTED),
        make_claim(2, hours=20, month="January 2026", lecturer_id=2, status=ClaimStatus.PENDING),
        make_claim(3, hours=30, month="February 2026", status=ClaimStatus.APPROVED_BY_COORDINATOR),
        make_claim(4, hours=40, month="February 2026", lecturer_id=2, status=ClaimStatus.APPROVED_BY_MANAGER),
        make_claim(5, hours=50, month="February 2026", status=ClaimStatus.REJECTED_BY_COORDINATOR, reason="x"),
        make_claim(6, hours=60, month="March 2026", lecturer_id=3, status=ClaimStatus.REJECTED_BY_MANAGER, reason="y"),
        make_claim(7, hours=70, month="March 2026", status=ClaimStatus.PAYMENT_PROCESSED),
        make_claim(8, hours=80, month="March 2026", lecturer_id=99, status=ClaimStatus.SUBMITTED),
    ]


def test_empty_claim_set_gives_zeroes():
    stats = build_statistics([], lecturer_names={}, generated_at=NOW)

    assert stats.total_claims == 0
    assert stats.total_amount_claimed == Decimal("0")
    assert stats.average_claim_amount == Decimal("0")
    assert stats.average_hours_per_claim == 0.0
    assert stats.approval_rate == 0.0
    assert stats.rejection_rate == 0.0
    assert stats.claims_by_month == {}
    assert stats.generated_at == NOW


def test_every_status_has_a_bucket():
    assert set(STATUS_BUCKETS) == set(ClaimStatus)


def test_counts_and_amounts():
    names = {1: "Thabo Nkosi", 2: "Anele Dube", 3: "Sarah Botha"}
    stats = build_statistics(_mixed_claims(), lecturer_names=names, generated_at=NOW)

    assert stats.total_claims == 8
    assert stats.submitted_claims == 3
    assert stats.approved_by_coordinator == 1
    assert stats.approved_by_manager == 1
    assert stats.rejected_claims == 2
    assert stats.payment_processed == 1

    # amounts are hours * 50
    assert stats.total_amount_claimed == Decimal("18000")
    assert stats.total_amount_pending == Decimal("7000")
    assert stats.total_amount_approved == Decimal("2000")
    assert stats.total_amount_rejected == Decimal("5500")
    assert stats.total_amount_paid == Decimal("3500")
    assert stats.average_claim_amount == Decimal("2250.00")
    assert stats.average_hours_per_claim == pytest.approx(45.0)


def test_bucket_amounts_partition_the_total():
    stats = build_statistics(_mixed_claims(), lecturer_names={}, generated_at=NOW)

    parts = (
        stats.total_amount_pending
        + stats.total_amount_approved
        + stats.total_amount_rejected
        + stats.total_amount_paid
    )
    assert parts == stats.total_amount_claimed


def test_rates_are_percentages_of_all_claims():
    stats = build_statistics(_mixed_claims(), lecturer_names={}, generated_at=NOW)

    assert stats.approval_rate == pytest.approx(25.0)
    assert stats.rejection_rate == pytest.approx(25.0)


def test_group_by_month_and_lecturer():
    names = {1: "Thabo Nkosi", 2: "Anele Dube", 3: "Sarah Botha"}
    stats = build_statistics(_mixed_claims(), lecturer_names=names, generated_at=NOW)

    assert stats.claims_by_month == {"January 2026": 2, "February 2026": 3, "March 2026": 3}
    assert stats.claims_by_lecturer == {"Thabo Nkosi": 4, "Anele Dube": 2, "Sarah Botha": 1, "Unknown": 1}


def test_to_dict_serialises_money_as_strings():
    data = build_statistics(_mixed_claims(), lecturer_names={}, generated_at=NOW).to_dict()

    assert data["total_amount_claimed"] == "18000"
    assert data["approval_rate"] == 25.0
    assert data["generated_at"] == "2026-03-01T08:00:00"


@pytest.fixture
def report_service():
    claims = InMemoryClaims(
        make_claim(1, status=ClaimStatus.SUBMITTED, submitted_at=SUBMITTED_AT + timedelta(days=2)),
        make_claim(2, status=ClaimStatus.PENDING, submitted_at=SUBMITTED_AT),
        make_claim(3, status=ClaimStatus.APPROVED_BY_COORDINATOR),
        make_claim(4, status=ClaimStatus.APPROVED_BY_MANAGER),
        make_claim(5, status=ClaimStatus.PAYMENT_PROCESSED),
        make_claim(6, status=ClaimStatus.SUBMITTED, submitted_at=SUBMITTED_AT),
    )
    lecturers = InMemoryLecturers(make_lecturer(1))
    return ClaimReportService(claims, lecturers, clock=lambda: NOW)


@pytest.mark.parametrize(
    "role, expected_ids",
    [
        (Role.COORDINATOR, [2, 6, 1]),
        (Role.MANAGER, [3]),
        (Role.HR, [4]),
        (Role.LECTURER, []),
        (Role.SYSTEM, []),
        (None, []),
    ],
)
def test_claims_requiring_attention(report_service, role, expected_ids):
    claims = report_service.claims_requiring_attention(role)
    assert [c.claim_id for c in claims] == expected_ids


def test_generate_statistics_uses_live_claims_and_clock(report_service):
    stats = report_service.generate_statistics()

    assert stats.total_claims == 6
    assert stats.claims_by_lecturer == {"Thabo Nkosi": 6}
    assert stats.generated_at == NOW
