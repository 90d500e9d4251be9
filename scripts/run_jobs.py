"""Run the periodic notification jobs from the command line (e.g. from cron)."""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import archive_old_notifications
from app.application.use_cases.reminders import ReminderScheduler
from app.config import get_settings
from app.infrastructure.database import SessionLocal, initialize_database
from app.utils import now_in_app_timezone, resolve_timezone

logger = logging.getLogger("scripts.run_jobs")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the job runner."""

    parser = argparse.ArgumentParser(
        description="Run Event Finder notification jobs once.",
    )
    parser.add_argument(
        "job",
        choices=("reminders", "archive"),
        help="reminders: create due event reminders; archive: delete old read notifications",
    )
    parser.add_argument(
        "--retention-days",
        type=int,
        default=None,
        help="Override NOTIFICATION_RETENTION_DAYS for the archive job",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output.",
    )
    return parser.parse_args()


def main() -> None:
    """Run the selected job and print how many rows it touched."""

    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = get_settings()
    initialize_database()

    session = SessionLocal()
    try:
        if args.job == "reminders":
            scheduler = ReminderScheduler(
                session,
                policy=settings.reminder_policy(),
                timezone=resolve_timezone(settings.app_timezone),
                clock=now_in_app_timezone,
            )
            count = scheduler.run()
            print(f"Reminders created: {count}")
        else:
            count = archive_old_notifications(
                session,
                retention_days=args.retention_days or settings.notification_retention_days,
            )
            print(f"Notifications deleted: {count}")
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Job %s failed", args.job)
        raise SystemExit(f"Job {args.job} failed: {exc}") from exc
    finally:
        session.close()


if __name__ == "__main__":
    main()
