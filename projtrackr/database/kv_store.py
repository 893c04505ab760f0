"""
Key-value store on top of a single Supabase table.

Expected table structure (see also ``kv_table`` in settings):

    CREATE TABLE kv_store (
      key TEXT NOT NULL PRIMARY KEY,
      value JSONB NOT NULL
    );

Keys are namespaced strings such as ``project:{user_id}:{project_id}``. The
table is accessed with the service role client, so row level security does
not apply; callers are responsible for scoping keys to the authenticated user.
"""

from supabase import Client
from projtrackr.core.exceptions import InternalError
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class KVStore:
    def __init__(self, supabase: Client, table: str = "kv_store"):
        self.supabase = supabase
        self.table = table

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the value stored under key, or None"""
        try:
            result = self.supabase.table(self.table)\
                .select("value")\
                .eq("key", key)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"KV get failed for {key}: {e}")
            raise InternalError("Failed to read from store")
        if not result.data:
            return None
        return result.data[0]["value"]

    def get_by_prefix(self, prefix: str) -> List[Dict[str, Any]]:
        """Return every value whose key starts with prefix. Order is not guaranteed."""
        try:
            result = self.supabase.table(self.table)\
                .select("key, value")\
                .like("key", f"{prefix}%")\
                .execute()
        except Exception as e:
            logger.error(f"KV prefix scan failed for {prefix}: {e}")
            raise InternalError("Failed to read from store")
        return [row["value"] for row in (result.data or [])]

    def set(self, key: str, value: Dict[str, Any]) -> None:
        try:
            self.supabase.table(self.table)\
                .upsert({"key": key, "value": value})\
                .execute()
        except Exception as e:
            logger.error(f"KV set failed for {key}: {e}")
            raise InternalError("Failed to write to store")

    def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is not an error."""
        try:
            self.supabase.table(self.table)\
                .delete()\
                .eq("key", key)\
                .execute()
        except Exception as e:
            logger.error(f"KV delete failed for {key}: {e}")
            raise InternalError("Failed to delete from store")

    def mget(self, keys: List[str]) -> List[Dict[str, Any]]:
        if not keys:
            return []
        try:
            result = self.supabase.table(self.table)\
                .select("key, value")\
                .in_("key", keys)\
                .execute()
        except Exception as e:
            logger.error(f"KV mget failed: {e}")
            raise InternalError("Failed to read from store")
        return [row["value"] for row in (result.data or [])]

    def mset(self, items: Dict[str, Dict[str, Any]]) -> None:
        if not items:
            return
        try:
            self.supabase.table(self.table)\
                .upsert([{"key": k, "value": v} for k, v in items.items()])\
                .execute()
        except Exception as e:
            logger.error(f"KV mset failed: {e}")
            raise InternalError("Failed to write to store")

    def mdel(self, keys: List[str]) -> None:
        if not keys:
            return
        try:
            self.supabase.table(self.table)\
                .delete()\
                .in_("key", keys)\
                .execute()
        except Exception as e:
            logger.error(f"KV mdel failed: {e}")
            raise InternalError("Failed to delete from store")
