"""
User service.

Writes users to the graph and triggers attribute link inference.
"""

import logging
from typing import Optional

from fraudgraph.errors import NotFoundError
from fraudgraph.graph.client import GraphClient, PropertyFilter
from fraudgraph.graph.schema import USER, User, decode_properties, utc_now_iso
from fraudgraph.linking.attribute_links import AttributeLinkDetector

logger = logging.getLogger(__name__)


class UserService:
    """Create, read, list and delete users."""

    def __init__(self, graph: GraphClient, detector: Optional[AttributeLinkDetector] = None):
        self.graph = graph
        self.detector = detector or AttributeLinkDetector(graph)

    async def upsert(self, data: dict) -> dict:
        """
        Create or update a user, then link it to users sharing its attributes.

        createdAt is kept from the first write; updatedAt is refreshed.

        Raises:
            ValidationError: if the payload is invalid (nothing is written)
        """
        user = User.from_payload(data)
        now = utc_now_iso()
        user.created_at = user.created_at or now
        user.updated_at = now

        stored = await self.graph.upsert_node(USER, user.id, user.to_properties())
        await self.detector.detect(user)

        logger.info(f"Upserted user {user.id}")
        return decode_properties(stored)

    async def get(self, user_id: str) -> dict:
        """
        Get a user by ID.

        Raises:
            NotFoundError: if the user does not exist
        """
        node = await self.graph.get_user(user_id)
        if node is None:
            raise NotFoundError(USER, user_id)
        return decode_properties(node)

    async def list_users(
        self, email: Optional[str] = None, phone: Optional[str] = None
    ) -> list[dict]:
        """List users newest first, optionally filtered by exact email or phone."""
        filters = []
        if email:
            filters.append(PropertyFilter("email", email))
        if phone:
            filters.append(PropertyFilter("phone", phone))
        nodes = await self.graph.list_nodes(USER, filters, order_by="createdAt")
        return [decode_properties(n) for n in nodes]

    async def delete(self, user_id: str) -> None:
        """
        Delete a user and every edge touching it.

        Raises:
            NotFoundError: if the user does not exist
        """
        if not await self.graph.delete_node(USER, user_id):
            raise NotFoundError(USER, user_id)
        logger.info(f"Deleted user {user_id}")
