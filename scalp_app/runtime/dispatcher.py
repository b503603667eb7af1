"""
Serialized event dispatch.

Hosts that deliver bars and ticks from several threads push them through a
single FIFO decision queue so that only one event is evaluated at a time.
This keeps the open-position count and the trailing ratchet consistent
with the ledger for every decision.
"""

import queue
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

import structlog

from ..data.models import AccountState, Candle, MarketQuote
from .session import TradingSession

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BarEvent:
    """Closed bar delivered by the feed."""
    now: datetime
    candles: tuple[Candle, ...]
    quote: MarketQuote
    account: AccountState


@dataclass(frozen=True)
class TickEvent:
    """Quote update delivered by the feed."""
    quote: MarketQuote


Event = Union[BarEvent, TickEvent]

_STOP = object()


class EventDispatcher:
    """
    FIFO decision queue in front of a TradingSession.

    Events can be drained synchronously with ``drain`` or consumed by a
    background worker started with ``start``. Either way each event runs
    to completion under one lock before the next begins.
    """

    def __init__(
        self,
        session: TradingSession,
        on_result: Optional[Callable[[Event, Any], None]] = None,
    ):
        self.session = session
        self.on_result = on_result
        self._queue: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None

    def submit_bar(
        self,
        now: datetime,
        candles: Sequence[Candle],
        quote: MarketQuote,
        account: AccountState,
    ) -> None:
        self._queue.put(BarEvent(now=now, candles=tuple(candles), quote=quote, account=account))

    def submit_tick(self, quote: MarketQuote) -> None:
        self._queue.put(TickEvent(quote=quote))

    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self) -> list[tuple[Event, Any]]:
        """Process every queued event in arrival order.

        Raises:
            RuntimeError: If the background worker is running; two
                consumers on one queue would break arrival order
        """
        if self._worker is not None and self._worker.is_alive():
            raise RuntimeError("Cannot drain while the dispatcher worker is running")

        processed = []
        while True:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                break
            if event is _STOP:
                # Keep the sentinel for the worker that is waiting on it
                self._queue.task_done()
                self._queue.put(_STOP)
                break
            processed.append((event, self._process(event)))
            self._queue.task_done()
        return processed

    def start(self) -> None:
        """Start a background worker consuming the queue."""
        if self._worker is not None and self._worker.is_alive():
            return
        self._worker = threading.Thread(target=self._run, name="scalp-dispatcher", daemon=True)
        self._worker.start()
        logger.info("Event dispatcher started", symbol=self.session.spec.name)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Process already queued events, then stop the worker."""
        if self._worker is None:
            return
        self._queue.put(_STOP)
        self._worker.join(timeout)
        self._worker = None
        logger.info("Event dispatcher stopped", symbol=self.session.spec.name)

    def _run(self) -> None:
        while True:
            event = self._queue.get()
            try:
                if event is _STOP:
                    return
                self._process(event)
            except Exception as e:
                logger.error(
                    "Event processing failed",
                    symbol=self.session.spec.name,
                    event_type=type(event).__name__,
                    error=str(e),
                    error_type=type(e).__name__,
                )
            finally:
                self._queue.task_done()

    def _process(self, event: Event) -> Any:
        with self._lock:
            if isinstance(event, BarEvent):
                result = self.session.process_bar(event.now, event.candles, event.quote, event.account)
            else:
                result = self.session.process_tick(event.quote)

        if self.on_result is not None:
            self.on_result(event, result)
        return result
