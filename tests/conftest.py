"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta
from typing import Dict, Generator, List, Optional, Set, Tuple
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from auction_settlement.domain.exceptions import NotificationError, PersistenceError
from auction_settlement.domain.models import Auction, Bid, Payment
from auction_settlement.infrastructure.clock import FixedClock
from auction_settlement.infrastructure.database.models import Base


# Wednesday
TODAY = datetime(2020, 4, 22, 10, 0, 0)


class CallLog:
    """Ordered record of collaborator calls shared across fakes"""

    def __init__(self):
        self.calls: List[Tuple[str, Optional[int]]] = []

    def record(self, name: str, auction_id: Optional[int]) -> None:
        self.calls.append((name, auction_id))

    def index_of(self, name: str, auction_id: Optional[int]) -> int:
        return self.calls.index((name, auction_id))

    def count(self, name: str, auction_id: Optional[int] = None) -> int:
        return sum(1 for n, a in self.calls if n == name and (auction_id is None or a == auction_id))


class InMemoryAuctionRepository:
    """Dict-backed auction repository; ids listed in fail_updates_for raise PersistenceError"""

    def __init__(self, log: CallLog):
        self.log = log
        self.auctions: Dict[int, Auction] = {}
        self.paid: Set[int] = set()
        self.fail_updates_for: Set[int] = set()
        self.fail_all_updates = False

    def add(self, auction: Auction) -> Auction:
        if auction.id is None:
            auction.id = len(self.auctions) + 1
        self.auctions[auction.id] = auction
        return auction

    def list_open(self) -> List[Auction]:
        self.log.record("list_open", None)
        return [a for a in self.auctions.values() if not a.closed]

    def update(self, auction: Auction) -> None:
        self.log.record("update", auction.id)
        if self.fail_all_updates or auction.id in self.fail_updates_for:
            raise PersistenceError(f"update failed for auction {auction.id}")
        self.auctions[auction.id] = auction

    def list_closed_awaiting_payment(self) -> List[Auction]:
        self.log.record("list_closed_awaiting_payment", None)
        return [a for a in self.auctions.values() if a.closed and a.id not in self.paid]


class InMemoryPaymentRepository:
    def __init__(self, log: CallLog, auctions: InMemoryAuctionRepository):
        self.log = log
        self.auctions = auctions
        self.saved: List[Payment] = []
        self.fail_saves_for: Set[int] = set()

    def save(self, payment: Payment) -> None:
        self.log.record("save", payment.auction_id)
        if payment.auction_id in self.fail_saves_for:
            raise PersistenceError(f"save failed for auction {payment.auction_id}")
        self.saved.append(payment)
        self.auctions.paid.add(payment.auction_id)


class RecordingNotificationSender:
    def __init__(self, log: CallLog):
        self.log = log
        self.sent: List[Auction] = []
        self.fail_for: Set[int] = set()

    def send(self, auction: Auction) -> None:
        self.log.record("send", auction.id)
        if auction.id in self.fail_for:
            raise NotificationError(f"mail server rejected auction {auction.id}")
        self.sent.append(auction)


def make_auction(
    description: str,
    created_at: datetime = TODAY - timedelta(days=30),
    bids: Optional[List[Tuple[str, float]]] = None,
    closed: bool = False,
) -> Auction:
    """Builder for auctions with optional (bidder, amount) bids"""
    auction = Auction(description=description, created_at=created_at)
    for bidder, amount in bids or []:
        auction.place_bid(Bid(bidder=bidder, amount=amount))
    auction.closed = closed
    return auction


@pytest.fixture
def call_log() -> CallLog:
    return CallLog()


@pytest.fixture
def auction_repo(call_log: CallLog) -> InMemoryAuctionRepository:
    return InMemoryAuctionRepository(call_log)


@pytest.fixture
def payment_repo(call_log: CallLog, auction_repo: InMemoryAuctionRepository) -> InMemoryPaymentRepository:
    return InMemoryPaymentRepository(call_log, auction_repo)


@pytest.fixture
def sender(call_log: CallLog) -> RecordingNotificationSender:
    return RecordingNotificationSender(call_log)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


# Test database
@pytest.fixture
def db() -> Generator[Session, None, None]:
    """In-memory SQLite database and session"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def today() -> datetime:
    return TODAY


@pytest.fixture
def auction_factory():
    return make_auction
