"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date
from functools import partial
from pathlib import Path

from supabase import create_client

from food_expiry.adapters.emailjs_client import HttpxEmailJsClient
from food_expiry.adapters.json_file_store import JsonFileKeyValueStore
from food_expiry.adapters.key_value_inventory_repository import (
    KeyValueInventoryRepository,
)
from food_expiry.adapters.supabase_key_value_store import SupabaseKeyValueStore
from food_expiry.config import Settings, today_in_timezone
from food_expiry.services.inventory import InventoryService
from food_expiry.services.reminders import (
    BackgroundReminderDispatcher,
    ReminderService,
)
from food_expiry.services.storage import KeyValueStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Callable[[], date]
    inventory_service: InventoryService
    reminder_service: ReminderService
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the configured key-value store."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise RuntimeError("Missing Supabase configuration")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    return JsonFileKeyValueStore(Path(settings.state_file))


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    clock = partial(today_in_timezone, resolved_settings.timezone)
    repository = KeyValueInventoryRepository(build_store(resolved_settings))
    inventory_service = InventoryService(
        repository,
        clock=clock,
        warning_days=resolved_settings.warning_threshold_days,
    )
    emailjs_client = HttpxEmailJsClient.create(
        base_url=resolved_settings.emailjs_base_url,
        service_id=resolved_settings.emailjs_service_id,
        template_id=resolved_settings.emailjs_template_id,
        public_key=resolved_settings.emailjs_public_key,
        private_key=resolved_settings.emailjs_private_key,
    )
    dispatcher = BackgroundReminderDispatcher(emailjs_client)
    reminder_service = ReminderService(
        inventory=inventory_service,
        dispatcher=dispatcher,
        threshold_days=resolved_settings.reminder_threshold_days,
        clock=clock,
    )
    inventory_service.on_food_added = reminder_service.handle_food_added

    async def close_resources() -> None:
        await dispatcher.aclose(emailjs_client.close)

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        inventory_service=inventory_service,
        reminder_service=reminder_service,
        close_resources=close_resources,
    )
