"""Settlement Reminder Background Worker

Periodically reminds parties whose pending balance has reached the
configured threshold. Can be run as a standalone script or integrated with a
scheduler.
"""

import asyncio
import logging
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from revenue_ledger.adapter.repositories.ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from revenue_ledger.adapter.services.notification_service import create_notification_service
from revenue_ledger.app.services.notification_service import NotificationService
from revenue_ledger.app.use_cases.settlement import SendSettlementReminders, SettlementReminderDTO

logger = logging.getLogger(__name__)


class SettlementReminderWorker:
    """
    Background worker for settlement reminders

    Features:
    - Checks every party's pending balance
    - Sends one reminder per party at or above the threshold
    - Can run once or continuously
    - Configurable interval (default: daily)

    Usage:
        # Run once
        worker = SettlementReminderWorker()
        reminders = await worker.run_once()

        # Run continuously
        worker = SettlementReminderWorker()
        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        threshold: Optional[Decimal] = None,
        notification_service: Optional[NotificationService] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            threshold: Pending amount that triggers a reminder
                       (defaults to ApplicationConfig.SETTLEMENT_REMINDER_THRESHOLD)
            notification_service: Reminder sink (defaults to the configured one)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.threshold = Decimal(str(
            threshold if threshold is not None else ApplicationConfig.SETTLEMENT_REMINDER_THRESHOLD
        ))
        self.notification_service = notification_service or create_notification_service(
            ApplicationConfig.SETTLEMENT_NOTIFICATION_WEBHOOK
        )

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info(f"SettlementReminderWorker initialized (threshold={self.threshold})")

    async def run_once(self) -> List[SettlementReminderDTO]:
        """
        Send reminders once

        Returns:
            Reminders that were delivered
        """
        if not ApplicationConfig.SETTLEMENT_REMINDER_ENABLED:
            logger.info("Settlement reminders are disabled, skipping")
            return []

        async with self.async_session_factory() as session:
            use_case = SendSettlementReminders(
                ledger_repo=SqlAlchemyLedgerEntryRepository(session),
                notification_service=self.notification_service,
                default_currency=ApplicationConfig.DEFAULT_CURRENCY,
            )

            result = await use_case.execute(self.threshold)

            if result.is_err():
                logger.error(f"Settlement reminders failed: {result.error.message}")
                raise RuntimeError(f"Settlement reminders failed: {result.error.message}")

            return result.value

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Send reminders continuously at the given interval

        Args:
            interval_seconds: Seconds between runs (default: 24 hours)
        """
        logger.info(f"Starting settlement reminders with {interval_seconds}s interval")

        while True:
            try:
                reminders = await self.run_once()
                logger.info(f"Reminder cycle complete. {len(reminders)} reminder(s) due")
            except Exception as e:
                logger.error(f"Reminder cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("SettlementReminderWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m revenue_ledger.worker.settlement_reminder --once

        # Run continuously (default interval from config)
        python -m revenue_ledger.worker.settlement_reminder

        # Custom interval (seconds) and threshold
        python -m revenue_ledger.worker.settlement_reminder --interval 3600 --threshold 500
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Settlement Reminder Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.SETTLEMENT_REMINDER_INTERVAL_SECONDS,
        help="Interval between runs in seconds"
    )
    parser.add_argument(
        "--threshold", type=Decimal, default=None,
        help="Pending amount that triggers a reminder"
    )
    args = parser.parse_args()

    worker = SettlementReminderWorker(threshold=args.threshold)

    try:
        if args.once:
            reminders = await worker.run_once()
            print(f"Settlement reminders due for {len(reminders)} party(ies)")
            for reminder in reminders:
                status = "delivered" if reminder.delivered else "not delivered"
                print(f"  - {reminder.party}: {reminder.amount} {reminder.currency} ({status})")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
