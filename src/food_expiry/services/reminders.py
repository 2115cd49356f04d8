"""Expiry reminder sweep and fire-and-forget dispatch."""

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from concurrent.futures import Future
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from food_expiry.domain.expiry import remaining_days
from food_expiry.domain.inventory import FoodEntry
from food_expiry.domain.reminders import ReminderMessage, needs_reminder
from food_expiry.services.inventory import InventoryService

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_DAYS = 2


class ReminderNotifier(Protocol):
    """Interface for delivering reminder emails."""

    async def send_reminder(self, message: ReminderMessage) -> bool:
        """Deliver a reminder message, returning whether anything was sent."""


class ReminderDispatcher(Protocol):
    """Interface for launching reminder deliveries without waiting on them."""

    def dispatch(self, message: ReminderMessage) -> None:
        """Start delivering a reminder message."""


@dataclass
class BackgroundReminderDispatcher(ReminderDispatcher):
    """Dispatcher that delivers on its own event loop in a daemon thread.

    The loop starts on first dispatch and lives until ``aclose``. Keeping all
    deliveries on one loop lets the notifier hold a single async HTTP session.
    """

    notifier: ReminderNotifier
    _loop: asyncio.AbstractEventLoop | None = field(
        default=None, init=False, repr=False
    )
    _thread: threading.Thread | None = field(default=None, init=False, repr=False)
    _pending: set[Future[None]] = field(default_factory=set, init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def dispatch(self, message: ReminderMessage) -> None:
        """Hand the delivery to the background loop and return immediately."""
        future = asyncio.run_coroutine_threadsafe(
            self._deliver(message), self._ensure_loop()
        )
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    async def drain(self) -> None:
        """Wait for outstanding deliveries to finish."""
        with self._lock:
            pending = list(self._pending)
        if pending:
            await asyncio.gather(
                *(asyncio.wrap_future(future) for future in pending),
                return_exceptions=True,
            )

    async def aclose(
        self, cleanup: Callable[[], Awaitable[None]] | None = None
    ) -> None:
        """Drain deliveries, run ``cleanup`` on the delivery loop and stop it."""
        await self.drain()
        loop, thread = self._loop, self._thread
        if loop is None or thread is None:
            if cleanup is not None:
                await cleanup()
            return
        if cleanup is not None:
            await asyncio.wrap_future(
                asyncio.run_coroutine_threadsafe(cleanup(), loop)
            )
        loop.call_soon_threadsafe(loop.stop)
        await asyncio.to_thread(thread.join)
        loop.close()
        with self._lock:
            self._loop = None
            self._thread = None

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=loop.run_forever, name="reminder-dispatch", daemon=True
                )
                thread.start()
                self._loop = loop
                self._thread = thread
            return self._loop

    def _forget(self, future: Future[None]) -> None:
        with self._lock:
            self._pending.discard(future)

    async def _deliver(self, message: ReminderMessage) -> None:
        try:
            sent = await self.notifier.send_reminder(message)
        except Exception:
            logger.exception(
                "Email failed to send",
                extra={"item_name": message.item_name},
            )
            return
        if sent:
            logger.info("Reminder sent successfully to %s", message.to_email)


@dataclass
class ReminderService:
    """Service that dispatches reminders for entries close to expiry."""

    inventory: InventoryService
    dispatcher: ReminderDispatcher
    threshold_days: int = DEFAULT_REMINDER_DAYS
    clock: Callable[[], date] = date.today

    def sweep(self, today: date | None = None) -> list[FoodEntry]:
        """Dispatch pending reminders and persist the reminder flags."""
        resolved_today = today or self.clock()
        dispatched: list[FoodEntry] = []
        for food in self.inventory.foods:
            days = remaining_days(food.expiry_date, resolved_today)
            if needs_reminder(food, days, self.threshold_days):
                self.dispatcher.dispatch(ReminderMessage.for_food(food))
                dispatched.append(food)
        self.inventory.mark_reminders_sent({food.id for food in dispatched})
        if dispatched:
            logger.info("Dispatched %d expiry reminders", len(dispatched))
        return dispatched

    def handle_food_added(self, food: FoodEntry) -> None:
        """Run the sweep right after a food entry is registered."""
        self.sweep()


async def run_reminder_loop(service: ReminderService, interval_seconds: float) -> None:
    """Sweep once per interval until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            service.sweep()
        except Exception:
            logger.exception("Reminder sweep failed")
