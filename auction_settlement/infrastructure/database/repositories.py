"""Data access layer for auctions and payments"""

from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from auction_settlement.infrastructure.database.models import AuctionRecord, BidRecord, PaymentRecord
from auction_settlement.domain.exceptions import PersistenceError
from auction_settlement.domain.models import Auction, Bid, Payment


def to_domain(record: AuctionRecord) -> Auction:
    return Auction(
        id=record.id,
        description=record.description,
        created_at=record.created_at,
        closed=record.closed,
        bids=[Bid(bidder=b.bidder, amount=b.amount) for b in record.bids],
    )


class SqlAuctionRepository:
    """Repository for auctions and their bids"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, auction: Auction) -> Auction:
        """Persist a new auction and assign its id"""
        try:
            db_auction = AuctionRecord(
                description=auction.description,
                created_at=auction.created_at,
                closed=auction.closed,
            )
            for position, bid in enumerate(auction.bids):
                db_auction.bids.append(BidRecord(position=position, bidder=bid.bidder, amount=bid.amount))
            self.db.add(db_auction)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Could not add auction {auction.description!r}: {e}") from e

        auction.id = db_auction.id
        return auction

    def list_open(self) -> List[Auction]:
        """Fetch auctions still accepting bids"""
        records = (
            self.db.query(AuctionRecord)
            .filter(AuctionRecord.closed.is_(False))
            .order_by(AuctionRecord.id)
            .all()
        )
        return [to_domain(r) for r in records]

    def update(self, auction: Auction) -> None:
        """Persist closed flag, description and any bids appended since load"""
        try:
            db_auction = self.db.get(AuctionRecord, auction.id) if auction.id is not None else None
            if db_auction is None:
                raise PersistenceError(f"Auction {auction.id} does not exist")

            db_auction.description = auction.description
            db_auction.closed = db_auction.closed or auction.closed
            for position in range(len(db_auction.bids), len(auction.bids)):
                bid = auction.bids[position]
                db_auction.bids.append(BidRecord(position=position, bidder=bid.bidder, amount=bid.amount))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Could not update auction {auction.id}: {e}") from e

    def list_closed_awaiting_payment(self) -> List[Auction]:
        """Closed auctions with no payment row yet"""
        records = (
            self.db.query(AuctionRecord)
            .filter(AuctionRecord.closed.is_(True), ~AuctionRecord.payments.any())
            .order_by(AuctionRecord.id)
            .all()
        )
        return [to_domain(r) for r in records]


class SqlPaymentRepository:
    """Repository for scheduled payments"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, payment: Payment) -> None:
        try:
            self.db.add(
                PaymentRecord(
                    auction_id=payment.auction_id,
                    amount=payment.amount,
                    scheduled_date=payment.scheduled_date,
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Could not save payment for auction {payment.auction_id}: {e}") from e

    def list_for_auction(self, auction_id: int) -> List[Payment]:
        records = (
            self.db.query(PaymentRecord)
            .filter(PaymentRecord.auction_id == auction_id)
            .order_by(PaymentRecord.id)
            .all()
        )
        return [
            Payment(amount=r.amount, scheduled_date=r.scheduled_date, auction_id=r.auction_id)
            for r in records
        ]
