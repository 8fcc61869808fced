"""
Client Service - Business logic for the Client Registry.
"""
from typing import Dict, List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError

from ..core.pagination import total_pages
from ..exceptions import InternalServerException, NotFoundException, ValidationException
from .models import Client
from .repository import ClientRepository
from .schemas import ClientCreate, ClientSearchFilters, ClientUpdate

# Set up logging
logger = logging.getLogger(__name__)

# Columns that may be changed but never cleared
REQUIRED_FIELDS = ("first_name", "last_name", "date_of_birth", "gender")


class ClientService:
    """Client Registry operations over a client repository."""

    def __init__(self, clients: ClientRepository):
        self.clients = clients

    def register_client(self, client_data: ClientCreate, registered_by_id: str) -> Client:
        """
        Register a new client.

        Args:
            client_data: Validated client fields
            registered_by_id: ID of the user registering the client

        Returns:
            Client: Created client
        """
        client = Client(**client_data.model_dump(), registered_by_id=registered_by_id)
        try:
            client = self.clients.add(client)
        except SQLAlchemyError:
            raise InternalServerException("Failed to register client")
        logger.info(f"Client {client.id} registered by user {registered_by_id}")
        return client

    def list_clients(
        self,
        filters: Optional[ClientSearchFilters] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Dict:
        """
        Get a paginated list of clients with optional filtering.

        Args:
            filters: Optional equality filters
            page: Page number (1-based)
            page_size: Number of items per page

        Returns:
            Dict with clients, total, page, page_size and total_pages
        """
        criteria = filters.model_dump(exclude_none=True) if filters else {}
        offset = (page - 1) * page_size
        clients, total = self.clients.list(criteria, offset, page_size)
        return {
            "clients": clients,
            "total": total,
            "page": page,
            "page_size": page_size,
            "total_pages": total_pages(total, page_size),
        }

    def get_client(self, client_id: str) -> Client:
        """
        Get a client by ID.

        Raises:
            NotFoundException: If the client does not exist
        """
        client = self.clients.get(client_id)
        if not client:
            raise NotFoundException("Client not found")
        return client

    def update_client(self, client_id: str, update_data: ClientUpdate) -> Client:
        """
        Merge the supplied fields onto a stored client.

        Raises:
            NotFoundException: If the client does not exist
        """
        client = self.get_client(client_id)

        changes = update_data.model_dump(exclude_unset=True)
        if changes.get("allergies", []) is None:
            changes["allergies"] = []
        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationException(f"{field} cannot be empty")

        for field, value in changes.items():
            setattr(client, field, value)

        try:
            client = self.clients.save(client)
        except SQLAlchemyError:
            raise InternalServerException("Failed to update client")
        logger.info(f"Client {client_id} updated fields: {sorted(changes)}")
        return client

    def search_clients(self, query: Optional[str]) -> List[Client]:
        """
        Case-insensitive search over first name, last name, phone and email.

        An empty query matches nothing.
        """
        if not query or not query.strip():
            return []
        return self.clients.search(query.strip())
