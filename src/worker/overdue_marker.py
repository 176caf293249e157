"""Overdue Invoice Background Worker

Periodically moves SENT/VIEWED invoices past their due date to OVERDUE.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.invoice_status_history_repository import (
    SqlAlchemyInvoiceStatusHistoryRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices import MarkOverdueInvoices

logger = logging.getLogger(__name__)


class OverdueInvoiceWorker:
    """
    Background worker for automatic overdue detection

    Features:
    - Runs hourly by default (OVERDUE_CHECK_INTERVAL_SECONDS)
    - Can be disabled with OVERDUE_CHECK_ENABLED
    - Can run once or continuously

    Usage:
        # Run once
        worker = OverdueInvoiceWorker()
        await worker.run_once()

        # Run continuously
        worker = OverdueInvoiceWorker()
        await worker.run_forever(interval_seconds=3600)
    """

    def __init__(self, db_uri: Optional[str] = None, batch_size: int = 500):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            batch_size: Maximum invoices marked per run
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.batch_size = batch_size

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info(f"OverdueInvoiceWorker initialized with batch_size={self.batch_size}")

    async def run_once(self, today: Optional[date] = None) -> int:
        """
        Run overdue detection once

        Args:
            today: Reference date (default: today)

        Returns:
            Number of invoices marked as overdue
        """
        if not ApplicationConfig.OVERDUE_CHECK_ENABLED:
            logger.info("Overdue detection is disabled, skipping")
            return 0

        async with self.async_session_factory() as session:
            uow = SqlAlchemyUnitOfWork(session)
            invoice_repo = SqlAlchemyInvoiceRepository(session)
            history_repo = SqlAlchemyInvoiceStatusHistoryRepository(session)

            use_case = MarkOverdueInvoices(
                uow=uow,
                invoice_repo=invoice_repo,
                history_repo=history_repo,
                batch_size=self.batch_size,
            )

            result = await use_case.execute(today=today)

            if result.is_err():
                logger.error(f"Overdue detection failed: {result.error.message} ({result.error.reason})")
                return 0

            return result.value.marked

    async def run_forever(self, interval_seconds: Optional[int] = None):
        """
        Run overdue detection continuously at specified interval

        Args:
            interval_seconds: Seconds between runs (default: OVERDUE_CHECK_INTERVAL_SECONDS)
        """
        interval_seconds = interval_seconds or ApplicationConfig.OVERDUE_CHECK_INTERVAL_SECONDS
        logger.info(f"Starting continuous overdue detection with {interval_seconds}s interval")

        while True:
            try:
                count = await self.run_once()
                logger.info(f"Overdue cycle complete. Marked {count} invoices")
            except Exception as e:
                logger.error(f"Overdue cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("OverdueInvoiceWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.overdue_marker --once

        # Run once as of a given date
        python -m src.worker.overdue_marker --once --date 2024-04-01

        # Run continuously
        python -m src.worker.overdue_marker --interval 600
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Invoice Worker")
    parser.add_argument("--once", action="store_true", help="Run a single detection")
    parser.add_argument("--date", type=date.fromisoformat, help="Reference date (YYYY-MM-DD)")
    parser.add_argument("--interval", type=int, help="Seconds between runs")
    args = parser.parse_args()

    worker = OverdueInvoiceWorker()

    try:
        if args.once:
            count = await worker.run_once(today=args.date)
            print(f"Overdue detection complete. Marked {count} invoices.")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
