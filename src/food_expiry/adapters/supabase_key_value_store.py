"""Supabase implementation of the key-value store."""

from dataclasses import dataclass

from supabase import Client

from food_expiry.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase-backed key-value store using a two-column table."""

    client: Client
    table: str = "app_state"

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return str(value) if value is not None else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the stored value for a key."""
        response = (
            self.client.table(self.table)
            .upsert({"key": key, "value": value})
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to store state for key {key!r}")
