"""Supabase repository for one-time setup markers."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.services.bootstrap import MarkerRepository


@dataclass
class SupabaseMarkerRepository(MarkerRepository):
    """Stores markers as rows in ``app_markers``."""

    client: Client

    def has_marker(self, key: str) -> bool:
        """Return true when a marker row exists."""
        response = (
            self.client.table("app_markers")
            .select("key")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def create_marker(self, key: str) -> None:
        """Insert a marker row, ignoring an existing one."""
        self.client.table("app_markers").upsert(
            {"key": key, "created_at": datetime.now(tz=UTC).isoformat()}
        ).execute()
