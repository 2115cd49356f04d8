"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from itertools import count

import pytest

from food_expiry.adapters.key_value_inventory_repository import (
    KeyValueInventoryRepository,
)
from food_expiry.config import Settings
from food_expiry.containers import AppContainer
from food_expiry.domain.reminders import ReminderMessage
from food_expiry.services.inventory import InventoryService
from food_expiry.services.reminders import (
    ReminderDispatcher,
    ReminderNotifier,
    ReminderService,
)
from food_expiry.services.storage import KeyValueStore

TODAY = date(2024, 1, 1)


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
        self.writes.append(key)


@dataclass
class RecordingDispatcher(ReminderDispatcher):
    """Dispatcher that records messages instead of sending them."""

    messages: list[ReminderMessage] = field(default_factory=list)

    def dispatch(self, message: ReminderMessage) -> None:
        self.messages.append(message)


@dataclass
class FakeNotifier(ReminderNotifier):
    """Notifier that records messages and can be told to fail, skip or stall."""

    sent: list[ReminderMessage] = field(default_factory=list)
    fail: bool = False
    deliverable: bool = True
    delay: float = 0.0

    async def send_reminder(self, message: ReminderMessage) -> bool:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("delivery failed")
        if not self.deliverable:
            return False
        self.sent.append(message)
        return True


@dataclass
class FixedClock:
    """Clock returning a settable date."""

    today: date = TODAY

    def __call__(self) -> date:
        return self.today


def sequential_ids() -> Callable[[], str]:
    counter = count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        state_file=str(tmp_path / "state.json"),
        emailjs_public_key="public-key",
        reminder_interval_seconds=0,
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def inventory_service(
    store: InMemoryKeyValueStore, clock: FixedClock
) -> InventoryService:
    return InventoryService(
        KeyValueInventoryRepository(store),
        clock=clock,
        id_factory=sequential_ids(),
    )


@pytest.fixture
def reminder_service(
    inventory_service: InventoryService,
    dispatcher: RecordingDispatcher,
    clock: FixedClock,
) -> ReminderService:
    service = ReminderService(
        inventory=inventory_service, dispatcher=dispatcher, clock=clock
    )
    inventory_service.on_food_added = service.handle_food_added
    return service


@pytest.fixture
def container(
    settings: Settings,
    clock: FixedClock,
    inventory_service: InventoryService,
    reminder_service: ReminderService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        clock=clock,
        inventory_service=inventory_service,
        reminder_service=reminder_service,
        close_resources=close_resources,
    )
