"""Settlement cycle - closing pass followed by payment generation"""

import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session

from auction_settlement.config import settings
from auction_settlement.domain.models import BatchReport
from auction_settlement.domain.ports import Clock, NotificationSender
from auction_settlement.infrastructure.clients.notifier import WebhookNotificationSender
from auction_settlement.infrastructure.database.repositories import SqlAuctionRepository, SqlPaymentRepository
from auction_settlement.infrastructure.database.session import create_db_engine, create_session_factory, get_db
from auction_settlement.infrastructure.observability.logging import setup_logging
from auction_settlement.services.closing import AuctionCloser
from auction_settlement.services.payments import PaymentScheduler


@dataclass
class SettlementResult:
    closing: BatchReport
    payments: BatchReport


def run_settlement(
    db: Session,
    sender: NotificationSender,
    clock: Optional[Clock] = None,
    closing_age_days: Optional[int] = None,
) -> SettlementResult:
    """
    Run one settlement cycle against a database session.

    Flow:
    1. Close open auctions past their closing age and notify the channel
    2. Generate payments for closed auctions still awaiting one
    """
    auctions = SqlAuctionRepository(db)
    closer = AuctionCloser(auctions, sender, clock=clock, closing_age_days=closing_age_days)
    closing = closer.run()

    scheduler = PaymentScheduler(auctions, SqlPaymentRepository(db), clock=clock)
    payments = scheduler.run()

    logging.info(
        "Settlement cycle completed",
        extra={
            "step": "settlement_complete",
            "auctions_closed": closer.closed_count,
            "notification_failures": len(closer.notification_failures),
            "payments_scheduled": scheduler.scheduled_count,
        },
    )
    return SettlementResult(closing=closing, payments=payments)


def run_scheduled_cycle(database_url: str | None = None) -> SettlementResult:
    """Entry point for an external scheduler tick, wired from settings"""
    setup_logging(settings.log_level)
    engine = create_db_engine(database_url)
    sender = WebhookNotificationSender()
    try:
        with get_db(create_session_factory(engine)) as db:
            return run_settlement(db, sender)
    finally:
        sender.close()
        engine.dispose()
