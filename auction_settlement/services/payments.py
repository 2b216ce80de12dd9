"""Payment generation for auctions that have already closed"""

import time
from typing import List, Optional

from auction_settlement.domain.evaluator import Evaluator
from auction_settlement.domain.models import Auction, BatchReport, ItemOutcome, Payment
from auction_settlement.domain.ports import AuctionRepository, Clock, PaymentRepository
from auction_settlement.infrastructure.clock import SystemClock
from auction_settlement.infrastructure.observability.logging import log_batch_summary, log_item_failure
from auction_settlement.infrastructure.observability.metrics import payments_scheduled_counter, record_payment_failure
from auction_settlement.utils.date_utils import next_business_day

PASS_NAME = "payment_scheduler"


class PaymentScheduler:
    """
    Generate one payment per closed auction awaiting payment.

    The amount is the winning bid and the date is "now" pushed forward to
    the next business day. Which auctions still await payment is decided
    by the repository query alone.
    """

    def __init__(
        self,
        auctions: AuctionRepository,
        payments: PaymentRepository,
        evaluator: Optional[Evaluator] = None,
        clock: Optional[Clock] = None,
    ):
        self.auctions = auctions
        self.payments = payments
        self.evaluator = evaluator or Evaluator()
        self.clock = clock or SystemClock()
        self.scheduled_count = 0
        self.generated: List[Payment] = []

    def run(self) -> BatchReport:
        start_time = time.time()
        self.scheduled_count = 0
        self.generated = []
        report = BatchReport()

        for auction in self.auctions.list_closed_awaiting_payment():
            report.outcomes.append(self._schedule(auction))

        duration_ms = (time.time() - start_time) * 1000
        log_batch_summary(PASS_NAME, len(report.outcomes), self.scheduled_count, len(report.failed), duration_ms)
        return report

    def _schedule(self, auction: Auction) -> ItemOutcome:
        try:
            amount = self.evaluator.evaluate(auction)
        except Exception as e:
            return self._failed(auction, "evaluate", e)

        payment = Payment(
            amount=amount,
            scheduled_date=next_business_day(self.clock.now()),
            auction_id=auction.id,
        )

        try:
            self.payments.save(payment)
        except Exception as e:
            return self._failed(auction, "save", e)

        self.scheduled_count += 1
        self.generated.append(payment)
        payments_scheduled_counter.inc()
        return ItemOutcome(auction.id, auction.description, succeeded=True)

    def _failed(self, auction: Auction, stage: str, error: Exception) -> ItemOutcome:
        record_payment_failure(stage)
        log_item_failure(PASS_NAME, auction.id, stage, error)
        return ItemOutcome(auction.id, auction.description, succeeded=False, stage=stage, error=str(error))
