"""Timer-invoked endpoint that schedules event reminders."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.application.use_cases.reminders import ReminderScheduler
from app.interfaces.api.dependencies import get_reminder_scheduler, require_service_key
from app.interfaces.api.schemas import ReminderRunResult

router = APIRouter(
    prefix="/reminders",
    tags=["reminders"],
    dependencies=[Depends(require_service_key)],
)
logger = logging.getLogger(__name__)


@router.post("/schedule", response_model=ReminderRunResult)
def schedule_reminders(
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
):
    """Create due reminders. Called every 15 minutes by an external timer."""

    try:
        reminders_sent = scheduler.run()
    except Exception as exc:
        logger.exception("Error scheduling reminders")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ReminderRunResult(
                success=False, reminders_sent=0, error=str(exc) or "Unknown error"
            ).model_dump(exclude_none=True),
        )

    logger.info("Successfully scheduled %s reminder(s)", reminders_sent)
    return ReminderRunResult(success=True, reminders_sent=reminders_sent)
