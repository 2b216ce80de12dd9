"""Notification webhook client with exponential backoff retry logic"""

import time
import httpx
from typing import Any, Callable, Dict
from auction_settlement.config import settings
from auction_settlement.domain.exceptions import NotificationError
from auction_settlement.domain.models import Auction
from auction_settlement.infrastructure.observability.metrics import webhook_latency_histogram, webhook_failure_counter


def closed_auction_event(auction: Auction) -> Dict[str, Any]:
    """Webhook payload announcing a closed auction"""
    payload: Dict[str, Any] = {
        "event": "AUCTION_CLOSED",
        "auction_id": auction.id,
        "description": auction.description,
        "created_at": auction.created_at.isoformat(),
        "bid_count": len(auction.bids),
    }
    if auction.bids:
        payload["highest_bid"] = max(bid.amount for bid in auction.bids)
    return payload


class WebhookNotificationSender:
    """Sends closed-auction events to the downstream notification channel"""

    def __init__(
        self,
        webhook_url: str | None = None,
        client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.webhook_url = webhook_url or settings.notification_webhook_url
        self.client = client or httpx.Client(timeout=settings.http_timeout_seconds)
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base
        self.sleep = sleep

    def send(self, auction: Auction) -> None:
        """
        Send AUCTION_CLOSED event with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^(attempt-1))
        - Retries on HTTP error responses and network failures
        - Tracks latency histogram and failure counter

        Raises:
            NotificationError: After max_retries failed attempts
        """
        payload = closed_auction_event(auction)
        attempt = 0
        while True:
            try:
                with webhook_latency_histogram.time():
                    response = self.client.post(self.webhook_url, json=payload)
                    response.raise_for_status()
                    return  # Success

            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                attempt += 1
                webhook_failure_counter.inc()

                if attempt >= self.max_retries:
                    raise NotificationError(
                        f"Notification for auction {auction.id} failed after {attempt} attempts: {e}"
                    ) from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                self.sleep(backoff)

    def close(self) -> None:
        self.client.close()
