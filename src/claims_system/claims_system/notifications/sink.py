from __future__ import annotations

from typing import Protocol

from ..claims.model import Claim
from ..core.logging import get_logger
from ..lecturers.repository import LecturerLookup
from .messages import build_message

logger = get_logger(__name__)


class NotificationSink(Protocol):
    def notify(self, claim: Claim, action: str) -> None:
        raise NotImplementedError


class LoggingNotificationSink(NotificationSink):
    """Records the message that would be sent to the lecturer.

    There is no e-mail/SMS transport; the log line is the delivery.
    """

    def __init__(self, lecturers: LecturerLookup):
        self._lecturers = lecturers

    def notify(self, claim: Claim, action: str) -> None:
        lecturer = self._lecturers.get_by_id(claim.lecturer_id)
        logger.info(
            "notification_sent",
            claim_id=claim.claim_id,
            action=action,
            recipient=lecturer.email if lecturer else None,
            message=build_message(claim, action),
        )
