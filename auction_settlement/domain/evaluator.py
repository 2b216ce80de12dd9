"""Winning bid evaluation"""

from typing import List

from auction_settlement.domain.exceptions import EvaluationError
from auction_settlement.domain.models import Auction, Bid


class Evaluator:
    """Pure computation over an auction's bid history"""

    def evaluate(self, auction: Auction) -> float:
        """
        Return the winning (highest) bid amount.

        Raises:
            EvaluationError: If the auction has no bids
        """
        self._require_bids(auction)
        return max(bid.amount for bid in auction.bids)

    def lowest(self, auction: Auction) -> float:
        """Return the lowest bid amount"""
        self._require_bids(auction)
        return min(bid.amount for bid in auction.bids)

    def top_bids(self, auction: Auction, n: int = 3) -> List[Bid]:
        """Highest bids first; earlier bids win ties"""
        return sorted(auction.bids, key=lambda b: b.amount, reverse=True)[:n]

    @staticmethod
    def _require_bids(auction: Auction) -> None:
        if not auction.bids:
            raise EvaluationError(f"Auction {auction.id} ({auction.description!r}) has no bids")
