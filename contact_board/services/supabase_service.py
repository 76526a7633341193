import logging
from typing import Any, Dict, List, Optional

from supabase import create_client, Client

from ..core.config import Config


logger = logging.getLogger(__name__)


def get_client() -> Client:
    return create_client(Config.SUPABASE_URL, Config.supabase_key())


class SupabaseMessageStore:
    """Contact messages kept in a hosted Supabase table.

    Only two operations are used: inserting one row and selecting every row
    newest first. The client is created on first use so that pages can still
    render when Supabase is not configured. Failed queries raise
    postgrest.APIError from execute() and are left to the caller.
    """

    def __init__(self, table: str, client: Optional[Client] = None):
        self.table = table
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            Config.validate()
            self._client = get_client()
        return self._client

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        result = self.client.table(self.table).insert([record]).execute()
        rows = getattr(result, 'data', None) or []
        logger.debug(f"Inserted contact message into {self.table}")
        return rows[0] if rows else record

    def select_ordered(self) -> List[Dict[str, Any]]:
        result = (
            self.client
            .table(self.table)
            .select('*')
            .order('created_at', desc=True)
            .execute()
        )
        return list(getattr(result, 'data', None) or [])

    def ping(self) -> None:
        self.client.table(self.table).select('id').limit(1).execute()
