"""
Transaction link inference.

Derives the money-flow edges of a transaction (sender -> transaction ->
receiver, plus a direct sender -> receiver transfer) and the SHARES_IP,
SHARES_DEVICE and SHARES_LOCATION edges to earlier transactions carrying
the same metadata.
"""

import logging

from fraudgraph.graph.client import GraphClient
from fraudgraph.graph.edges import (
    Edge,
    ReceivedByEdge,
    SentMoneyEdge,
    SharesDeviceEdge,
    SharesIpEdge,
    SharesLocationEdge,
    TransferredToEdge,
)
from fraudgraph.graph.schema import TRANSACTION, Transaction

logger = logging.getLogger(__name__)


class TransactionLinkDetector:
    """Infers every edge a written transaction implies."""

    def __init__(self, graph: GraphClient):
        self.graph = graph

    @staticmethod
    def money_flow_edges(tx: Transaction) -> list[Edge]:
        """Edges implied by the sender and receiver of a transaction."""
        edges: list[Edge] = []
        if tx.sender_id:
            edges.append(SentMoneyEdge(
                from_id=tx.sender_id, to_id=tx.id,
                amount=tx.amount, currency=tx.currency,
            ))
        if tx.receiver_id:
            edges.append(ReceivedByEdge(
                from_id=tx.id, to_id=tx.receiver_id,
                amount=tx.amount, currency=tx.currency,
            ))
        if tx.sender_id and tx.receiver_id:
            edges.append(TransferredToEdge(
                from_id=tx.sender_id, to_id=tx.receiver_id,
                transaction_id=tx.id, amount=tx.amount,
                currency=tx.currency, timestamp=tx.timestamp,
            ))
        return edges

    async def link_money_flow(self, tx: Transaction) -> list[Edge]:
        """
        Merge the money-flow edges.

        An edge whose user endpoint does not exist is skipped and logged.
        """
        merged = []
        for edge in self.money_flow_edges(tx):
            if await self.graph.merge_edge(edge):
                merged.append(edge)
            else:
                logger.warning(
                    f"Skipped {edge.kind.value} for transaction {tx.id}: "
                    f"{edge.from_label} {edge.from_id} or {edge.to_label} {edge.to_id} not found"
                )
        return merged

    async def link_shared_metadata(self, tx: Transaction) -> list[Edge]:
        """Merge SHARES_* edges from tx to every other transaction with identical metadata."""
        candidates = []
        if tx.ip_address:
            candidates.append((SharesIpEdge, "ip_address", "ipAddress", tx.ip_address))
        if tx.device_id:
            candidates.append((SharesDeviceEdge, "device_id", "deviceId", tx.device_id))
        if tx.location:
            candidates.append(
                (SharesLocationEdge, "location", "location", tx.location.canonical())
            )

        edges: list[Edge] = []
        for edge_cls, edge_field, key, value in candidates:
            matches = await self.graph.find_matching_nodes(
                TRANSACTION, key, value, exclude_id=tx.id
            )
            for match in matches:
                edge = edge_cls(from_id=tx.id, to_id=match["id"], **{edge_field: value})
                if await self.graph.merge_edge(edge):
                    edges.append(edge)
        return edges

    async def detect(self, tx: Transaction) -> list[Edge]:
        """Merge all edges implied by tx. The transaction node must already exist."""
        edges = await self.link_money_flow(tx)
        shared = await self.link_shared_metadata(tx)
        if shared:
            logger.info(f"Linked transaction {tx.id} to {len(shared)} transaction(s) by metadata")
        return edges + shared
