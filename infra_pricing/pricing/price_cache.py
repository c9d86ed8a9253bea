"""
In-memory TTL cache for prices fetched from upstream APIs.
"""
import threading
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Optional, Tuple


class PriceCache:
    """Key -> (price, fetched_at). Entries older than the TTL are dropped on read."""

    def __init__(self, ttl_seconds: int):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._entries: Dict[str, Tuple[Decimal, datetime]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Decimal]:
        """
        Look up a cached price.

        An expired entry is removed as part of the lookup.

        Args:
            key: Cache key, e.g. "AmazonEC2:us-east-1:m5.xlarge"

        Returns:
            The cached price, or None when the key is missing or expired
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            price, fetched_at = entry
            if datetime.now() - fetched_at >= self.ttl:
                del self._entries[key]
                return None
            return price

    def put(self, key: str, price: Decimal) -> None:
        """
        Store a price, replacing any earlier entry and restarting its TTL.

        Args:
            key: Cache key
            price: Price returned by the upstream
        """
        with self._lock:
            self._entries[key] = (price, datetime.now())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
