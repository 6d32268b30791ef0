# ============================================================================
# booking/services/availability/request_sequencer.py
# Flags slot responses that were overtaken by a newer request
# ============================================================================
import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# Clients idle for longer than this are forgotten
CLIENT_TTL_SECONDS = 600
CLEANUP_INTERVAL_SECONDS = 60
MAX_TRACKED_CLIENTS = 10000


class RequestSequencer:
    """
    Tracks the newest request sequence number per client.

    A client that changes the date or service quickly fires several slot
    requests; only the response to the newest one should be applied. Each
    request is observed with its sequence number before computing, and the
    result is checked with `is_latest` afterwards.

    Idle clients expire after `ttl_seconds` and the table never holds more
    than `max_clients` keys (least recently seen go first). A forgotten
    client simply starts over, so none of its responses count as stale.

    In-process only: every worker process keeps its own table.
    """

    def __init__(
            self,
            ttl_seconds: float = CLIENT_TTL_SECONDS,
            cleanup_interval: float = CLEANUP_INTERVAL_SECONDS,
            max_clients: int = MAX_TRACKED_CLIENTS,
            clock: Callable[[], float] = time.monotonic
    ):
        # client_key -> (latest seq, last seen); insertion order is recency order
        self._latest: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()
        self._ttl = ttl_seconds
        self._cleanup_interval = cleanup_interval
        self._max_clients = max_clients
        self._clock = clock
        self._last_cleanup = clock()

    def observe(self, client_key: str, seq: Optional[int] = None) -> int:
        """Record a request and return its sequence number (assigned when not given)"""
        with self._lock:
            now = self._clock()
            self._cleanup_expired(now)

            current = self._current(client_key, now)
            if seq is None:
                seq = current + 1

            self._latest.pop(client_key, None)
            self._latest[client_key] = (max(seq, current), now)

            while len(self._latest) > self._max_clients:
                oldest = next(iter(self._latest))
                del self._latest[oldest]

            return seq

    def is_latest(self, client_key: str, seq: int) -> bool:
        with self._lock:
            return self._current(client_key, self._clock()) <= seq

    def forget(self, client_key: str) -> None:
        with self._lock:
            self._latest.pop(client_key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)

    def _current(self, client_key: str, now: float) -> int:
        entry = self._latest.get(client_key)
        if entry is None or now - entry[1] >= self._ttl:
            return 0
        return entry[0]

    def _cleanup_expired(self, now: float) -> None:
        """Drop idle clients, at most once per cleanup interval (lock held by caller)"""
        if now - self._last_cleanup < self._cleanup_interval:
            return

        expired = [k for k, (_, seen) in self._latest.items() if now - seen >= self._ttl]
        for key in expired:
            del self._latest[key]

        if expired:
            logger.debug(f"Forgot {len(expired)} idle slot request clients")

        self._last_cleanup = now


# Shared by the slot endpoints
slot_request_sequencer = RequestSequencer()
