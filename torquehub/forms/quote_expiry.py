"""
Quote expiry: the "expired" check used by the PDF footer, and the
background sweep that cancels DRAFT quotes whose validity has passed.

The sweep itself only schedules; cancelling rows is the order repository's
job, passed in as `expire_fn() -> int` (number of orders cancelled).
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from torquehub.forms.quote_model import OrderStatus, QuoteRecord

log = logging.getLogger("torquehub.quote_expiry")

SWEEP_INTERVAL = 6 * 60 * 60  # every 6 hours


def _aware(dt: datetime) -> datetime:
    """Naive datetimes are stored as UTC."""
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def is_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """True when an expiry is set and strictly in the past."""
    if expires_at is None:
        return False
    now = _aware(now) if now is not None else datetime.now(timezone.utc)
    return _aware(expires_at) < now


def select_stale_drafts(quotes: Iterable, now: Optional[datetime] = None) -> List:
    """DRAFT quotes (QuoteRecord or raw dict) whose expiry date has passed."""
    stale = []
    for q in quotes:
        record = q if isinstance(q, QuoteRecord) else QuoteRecord.from_dict(q)
        if record.status == OrderStatus.DRAFT and is_expired(record.quote_expires_at, now):
            stale.append(q)
    return stale


def run_expiry_sweep(expire_fn: Callable[[], int]) -> int:
    """One sweep. Errors are logged, not raised, so the scheduler keeps going."""
    try:
        count = int(expire_fn() or 0)
    except Exception as e:
        log.error("Quote expiry sweep failed: %s", e, exc_info=True)
        return 0
    if count > 0:
        log.info("Quote expiry: %d DRAFT quote(s) expired and cancelled", count,
                 extra={"expired": count})
    return count


# ── Background Scheduler ──────────────────────────────────────────────────────

_scheduler_thread = None
_scheduler_stop = threading.Event()


def start_expiry_scheduler(expire_fn: Callable[[], int],
                           interval_seconds: float = SWEEP_INTERVAL) -> threading.Thread:
    """Run one sweep now, then every `interval_seconds`. Starting twice is a no-op."""
    global _scheduler_thread
    if _scheduler_thread and _scheduler_thread.is_alive():
        return _scheduler_thread
    _scheduler_stop.clear()

    def _loop():
        log.info("Quote expiry scheduler started (every %ds)", interval_seconds)
        while not _scheduler_stop.is_set():
            run_expiry_sweep(expire_fn)
            _scheduler_stop.wait(interval_seconds)
        log.info("Quote expiry scheduler stopped")

    _scheduler_thread = threading.Thread(target=_loop, daemon=True, name="quote-expiry")
    _scheduler_thread.start()
    return _scheduler_thread


def stop_expiry_scheduler(timeout: float = 5.0):
    """Stop the background sweep (tests, shutdown hooks)."""
    global _scheduler_thread
    _scheduler_stop.set()
    if _scheduler_thread is not None:
        _scheduler_thread.join(timeout)
        _scheduler_thread = None
