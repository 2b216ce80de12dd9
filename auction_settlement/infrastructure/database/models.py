"""SQLAlchemy ORM models for auctions, bids and scheduled payments"""

from sqlalchemy import Column, Boolean, Float, DateTime, Date, Integer, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class AuctionRecord(Base):
    """Auction with its open/closed state"""

    __tablename__ = "auction"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    closed = Column(Boolean, nullable=False, default=False, index=True)

    bids = relationship(
        "BidRecord",
        back_populates="auction",
        cascade="all, delete-orphan",
        order_by="BidRecord.position",
    )
    payments = relationship("PaymentRecord", back_populates="auction")


class BidRecord(Base):
    """Single bid; position preserves insertion (time) order"""

    __tablename__ = "bid"

    id = Column(Integer, primary_key=True, autoincrement=True)
    auction_id = Column(Integer, ForeignKey("auction.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    bidder = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)

    auction = relationship("AuctionRecord", back_populates="bids")


class PaymentRecord(Base):
    """Payment scheduled for a closed auction, at most one per auction"""

    __tablename__ = "payment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    auction_id = Column(Integer, ForeignKey("auction.id"), nullable=False, unique=True)
    amount = Column(Float, nullable=False)
    scheduled_date = Column(Date, nullable=False)
    status = Column(Text, nullable=False, default="scheduled")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    auction = relationship("AuctionRecord", back_populates="payments")
