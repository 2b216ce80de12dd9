"""Closing pass - closes auctions whose bidding window has expired"""

import time
from datetime import datetime
from typing import List, Optional

from auction_settlement.config import settings
from auction_settlement.domain.models import Auction, BatchReport, ItemOutcome
from auction_settlement.domain.ports import AuctionRepository, Clock, NotificationSender
from auction_settlement.infrastructure.clock import SystemClock
from auction_settlement.infrastructure.observability.logging import log_batch_summary, log_item_failure
from auction_settlement.infrastructure.observability.metrics import auctions_closed_counter, record_closing_failure
from auction_settlement.utils.date_utils import closing_deadline, utc_date

PASS_NAME = "auction_closer"


class AuctionCloser:
    """
    Close every open auction that is at least `closing_age_days` old.

    Flow per qualifying auction (repository order, never re-sorted):
    1. Mark closed in memory
    2. Persist via AuctionRepository.update
    3. Only if the update succeeded, notify via NotificationSender.send

    A failing update or send is logged and recorded, and the batch moves on.
    A notification failure never rolls back the persisted closure.
    """

    def __init__(
        self,
        auctions: AuctionRepository,
        sender: NotificationSender,
        clock: Optional[Clock] = None,
        closing_age_days: Optional[int] = None,
    ):
        self.auctions = auctions
        self.sender = sender
        self.clock = clock or SystemClock()
        self.closing_age_days = settings.closing_age_days if closing_age_days is None else closing_age_days
        self.closed_count = 0
        self.notification_failures: List[ItemOutcome] = []

    def is_due(self, auction: Auction, now: datetime) -> bool:
        """Opening date plus the closing age is on or before today, both in UTC"""
        return closing_deadline(auction.created_at, self.closing_age_days) <= utc_date(now)

    def run(self) -> BatchReport:
        start_time = time.time()
        self.closed_count = 0
        self.notification_failures = []
        report = BatchReport()

        now = self.clock.now()
        for auction in self.auctions.list_open():
            if not self.is_due(auction, now):
                continue
            report.outcomes.append(self._close(auction))

        duration_ms = (time.time() - start_time) * 1000
        log_batch_summary(PASS_NAME, len(report.outcomes), self.closed_count, len(report.failed), duration_ms)
        return report

    def _close(self, auction: Auction) -> ItemOutcome:
        auction.close()

        try:
            self.auctions.update(auction)
        except Exception as e:
            record_closing_failure("update")
            log_item_failure(PASS_NAME, auction.id, "update", e)
            return ItemOutcome(auction.id, auction.description, succeeded=False, stage="update", error=str(e))

        self.closed_count += 1
        auctions_closed_counter.inc()

        try:
            self.sender.send(auction)
        except Exception as e:
            record_closing_failure("notify")
            log_item_failure(PASS_NAME, auction.id, "notify", e)
            self.notification_failures.append(
                ItemOutcome(auction.id, auction.description, succeeded=False, stage="notify", error=str(e))
            )

        return ItemOutcome(auction.id, auction.description, succeeded=True)
