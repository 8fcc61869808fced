"""
Client repository - persistence access for the Client Registry.
"""
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import or_

from ..core.repository import SqlRepository
from .models import Client

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so ``text`` only matches itself."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class ClientRepository(SqlRepository):
    """Repository for client CRUD and search queries."""

    # Fields matched by free-text search
    SEARCH_FIELDS = ("first_name", "last_name", "phone", "email")

    def add(self, client: Client) -> Client:
        self.db.add(client)
        return self._commit(client)

    def get(self, client_id: str) -> Optional[Client]:
        return self.db.query(Client).filter(Client.id == client_id).first()

    def exists(self, client_id: str) -> bool:
        return self.db.query(Client.id).filter(Client.id == client_id).first() is not None

    def list(self, filters: Dict[str, Any], offset: int, limit: int) -> Tuple[List[Client], int]:
        """
        Return one page of clients matching equality ``filters`` and the total count.
        """
        query = self.db.query(Client)
        for field, value in filters.items():
            query = query.filter(getattr(Client, field) == value)

        total = query.count()
        clients = (
            query.order_by(Client.registration_date.desc(), Client.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return clients, total

    def search(self, query_text: str) -> List[Client]:
        """Case-insensitive literal substring match over the search fields."""
        pattern = f"%{escape_like(query_text)}%"
        conditions = [getattr(Client, field).ilike(pattern, escape=LIKE_ESCAPE) for field in self.SEARCH_FIELDS]
        return (
            self.db.query(Client)
            .filter(or_(*conditions))
            .order_by(Client.last_name, Client.first_name)
            .all()
        )

    def save(self, client: Client) -> Client:
        return self._commit(client)
