"""
User attribute link inference.

When a user is written, every other user holding an identical email, phone,
address or payment method gets a SHARES_* edge from the written user.
Edges are never created in the reverse direction here; the other user's
outgoing edge appears only when that user is written.
"""

import logging
from typing import Any

from fraudgraph.graph.client import GraphClient
from fraudgraph.graph.edges import (
    Edge,
    SharesAddressEdge,
    SharesEmailEdge,
    SharesPaymentMethodEdge,
    SharesPhoneEdge,
)
from fraudgraph.graph.schema import USER, User

logger = logging.getLogger(__name__)


class AttributeLinkDetector:
    """
    Infers SHARES_EMAIL, SHARES_PHONE, SHARES_ADDRESS and
    SHARES_PAYMENT_METHOD edges for a freshly written user.

    Usage:
        detector = AttributeLinkDetector(graph)
        edges = await detector.detect(user)
    """

    def __init__(self, graph: GraphClient):
        self.graph = graph

    def _candidates(self, user: User) -> list[tuple[type[Edge], str, str, Any, bool]]:
        """(edge class, edge field, stored key, value, list membership) per attribute."""
        candidates = []
        if user.email:
            candidates.append((SharesEmailEdge, "email", "email", user.email, False))
        if user.phone:
            candidates.append((SharesPhoneEdge, "phone", "phone", user.phone, False))
        if user.address:
            candidates.append(
                (SharesAddressEdge, "address", "address", user.address.canonical(), False)
            )
        # Each distinct method is matched on its own
        for method in dict.fromkeys(m.canonical() for m in user.payment_methods):
            candidates.append(
                (SharesPaymentMethodEdge, "payment_method", "paymentMethods", method, True)
            )
        return candidates

    async def detect(self, user: User) -> list[Edge]:
        """
        Merge a SHARES_* edge from user to every other user with a matching attribute.

        Returns the edges ensured by this call. Re-running for the same user
        is a no-op on the graph.
        """
        edges: list[Edge] = []
        for edge_cls, edge_field, key, value, contains in self._candidates(user):
            matches = await self.graph.find_matching_nodes(
                USER, key, value, exclude_id=user.id, contains=contains
            )
            for match in matches:
                edge = edge_cls(from_id=user.id, to_id=match["id"], **{edge_field: value})
                if await self.graph.merge_edge(edge):
                    edges.append(edge)

        if edges:
            logger.info(f"Linked user {user.id} to {len(edges)} user(s) by shared attributes")
        return edges
