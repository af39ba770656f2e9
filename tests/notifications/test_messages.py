from __future__ import annotations

from src.claims_system.claims_system.core.enums import ClaimStatus
from src.claims_system.claims_system.notifications.messages import build_message
from src.claims_system.claims_system.notifications.sink import LoggingNotificationSink
from tests.fakes import InMemoryLecturers, make_claim, make_lecturer


def test_auto_approved_message_mentions_amount():
    msg = build_message(make_claim(4, hours=120, rate="50"), "auto-approved")
    assert msg == "Your claim #4 for January 2026 (R6,000.00) has been automatically approved."


def test_rejected_message_carries_reason():
    claim = make_claim(4, status=ClaimStatus.REJECTED_BY_MANAGER, reason="Module not taught")
    msg = build_message(claim, "REJECTED")
    assert "Reason: Module not taught." in msg


def test_paid_message():
    msg = build_message(make_claim(4, hours=10, rate="50"), "paid")
    assert msg == "Payment of R500.00 for claim #4 (January 2026) has been processed."


def test_unknown_action_falls_back_to_status_update():
    msg = build_message(make_claim(4), "escalated")
    assert msg == "Status update for claim #4: Submitted"


def test_logging_sink_tolerates_unknown_lecturer():
    sink = LoggingNotificationSink(InMemoryLecturers(make_lecturer(1)))
    sink.notify(make_claim(1, lecturer_id=1), "approved")
    sink.notify(make_claim(2, lecturer_id=9), "approved")
