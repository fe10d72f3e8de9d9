"""
automation/services/notification.py

Push notification service for fired triggers and insulin profile warnings.
Currently implements a stub for FCM/APNs integration.
"""

import structlog

from config import settings

logger = structlog.get_logger(__name__)


async def send_push(user_message: str, trigger_id: int | None = None) -> None:
    """
    Send a non-urgent push notification to the user.

    Called by the trigger evaluator when a trigger fires.
    In production, this would integrate with FCM or APNs.
    """
    logger.info(
        "push_notification_sent",
        trigger_id=trigger_id,
        message_length=len(user_message),
        fcm_key_present=bool(settings.fcm_server_key),
    )


def send_short_dia_warning(dia: float, min_dia: float) -> None:
    """
    Raise an urgent notification that the configured DIA is too short.

    Called synchronously from the insulin model while computing IOB.
    """
    logger.warning(
        "short_dia_notification",
        message=f"DIA value of {dia:.1f} too short - using {min_dia:.1f} instead!",
        dia=dia,
        min_dia=min_dia,
        fcm_key_present=bool(settings.fcm_server_key),
    )
