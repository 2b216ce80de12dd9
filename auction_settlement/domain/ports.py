"""Collaborator contracts consumed by the settlement passes"""

from datetime import datetime
from typing import List, Protocol

from auction_settlement.domain.models import Auction, Payment


class AuctionRepository(Protocol):
    """Source of truth for auctions and their open/closed state"""

    def list_open(self) -> List[Auction]:
        """All auctions with closed=False, in any order"""
        ...

    def update(self, auction: Auction) -> None:
        """Persist a state change. Raises PersistenceError on failure."""
        ...

    def list_closed_awaiting_payment(self) -> List[Auction]:
        """Closed auctions that have no payment yet"""
        ...


class PaymentRepository(Protocol):
    def save(self, payment: Payment) -> None:
        """Persist a new payment. Raises PersistenceError on failure."""
        ...


class NotificationSender(Protocol):
    def send(self, auction: Auction) -> None:
        """Notify about a closed auction. Raises NotificationError on failure."""
        ...


class Clock(Protocol):
    """Source of the current time. Inject a fixed clock in tests."""

    def now(self) -> datetime: ...
