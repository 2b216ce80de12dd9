"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass
class Bid:
    """Monetary offer on an auction, tied to a bidder"""

    bidder: str
    amount: float

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Bid amount must be non-negative, got {self.amount}")


@dataclass
class Auction:
    """Sellable item with a bid history and an open/closed state"""

    description: str
    created_at: datetime
    bids: List[Bid] = field(default_factory=list)
    closed: bool = False
    id: Optional[int] = None

    def place_bid(self, bid: Bid) -> None:
        """Append a bid; insertion order is time order"""
        if self.closed:
            raise ValueError(f"Auction {self.id} is closed")
        self.bids.append(bid)

    def close(self) -> None:
        """One-way transition to closed"""
        self.closed = True


@dataclass(frozen=True)
class Payment:
    """Scheduled settlement of a closed auction's winning bid"""

    amount: float
    scheduled_date: date
    auction_id: Optional[int] = None


@dataclass
class ItemOutcome:
    """Result of processing one auction within a batch pass"""

    auction_id: Optional[int]
    description: str
    succeeded: bool
    stage: Optional[str] = None  # "update" | "notify" | "evaluate" | "save"
    error: Optional[str] = None


@dataclass
class BatchReport:
    """Per-item outcomes collected by a single run() of a pass"""

    outcomes: List[ItemOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[ItemOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> List[ItemOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    def failures_at(self, stage: str) -> List[ItemOutcome]:
        return [o for o in self.outcomes if not o.succeeded and o.stage == stage]
