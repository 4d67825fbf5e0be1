"""Supabase-backed key-value store for the insight cache."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutrition_insights.services.cache import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores values in the ``insight_cache`` table, scoped to one user."""

    client: Client
    user_id: str
    table: str = "insight_cache"

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("user_id", self.user_id)
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value for a key."""
        self.client.table(self.table).upsert(
            {
                "user_id": self.user_id,
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id,key",
        ).execute()
