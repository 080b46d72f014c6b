"""
Transaction service.

Writes transactions to the graph and triggers money-flow and shared
metadata link inference.
"""

import logging
from typing import Any, Optional

from fraudgraph.errors import NotFoundError
from fraudgraph.graph.client import GraphClient, PropertyFilter
from fraudgraph.graph.schema import (
    TRANSACTION,
    Transaction,
    decode_properties,
    parse_amount,
    utc_now_iso,
)
from fraudgraph.linking.transaction_links import TransactionLinkDetector

logger = logging.getLogger(__name__)


class TransactionService:
    """Create, read, list and delete transactions."""

    def __init__(self, graph: GraphClient, detector: Optional[TransactionLinkDetector] = None):
        self.graph = graph
        self.detector = detector or TransactionLinkDetector(graph)

    async def upsert(self, data: dict) -> dict:
        """
        Create or update a transaction and infer its edges.

        An update without a timestamp keeps the stored one, so re-sending
        the same payload merges onto the same TRANSFERRED_TO edge.

        Raises:
            ValidationError: if the amount is not positive or no user is given
                (nothing is written)
        """
        tx = Transaction.from_payload(data)
        if not data.get("timestamp"):
            existing = await self.graph.get_transaction(tx.id)
            if existing and existing.get("timestamp"):
                tx.timestamp = existing["timestamp"]
        now = utc_now_iso()
        tx.created_at = tx.created_at or now
        tx.updated_at = now

        stored = await self.graph.upsert_node(TRANSACTION, tx.id, tx.to_properties())
        await self.detector.detect(tx)

        logger.info(f"Upserted transaction {tx.id} ({tx.amount} {tx.currency})")
        return decode_properties(stored)

    async def get(self, transaction_id: str) -> dict:
        """
        Get a transaction by ID.

        Raises:
            NotFoundError: if the transaction does not exist
        """
        node = await self.graph.get_transaction(transaction_id)
        if node is None:
            raise NotFoundError(TRANSACTION, transaction_id)
        return decode_properties(node)

    async def list_transactions(
        self,
        status: Optional[str] = None,
        min_amount: Any = None,
        max_amount: Any = None,
        currency: Optional[str] = None,
    ) -> list[dict]:
        """
        List transactions newest first.

        Raises:
            ValidationError: if an amount bound is not a non-negative number
        """
        filters = []
        if status:
            filters.append(PropertyFilter("status", status))
        if min_amount is not None:
            lower = parse_amount(min_amount, "minAmount", allow_zero=True)
            filters.append(PropertyFilter("amount", lower, ">="))
        if max_amount is not None:
            upper = parse_amount(max_amount, "maxAmount", allow_zero=True)
            filters.append(PropertyFilter("amount", upper, "<="))
        if currency:
            filters.append(PropertyFilter("currency", currency))
        nodes = await self.graph.list_nodes(TRANSACTION, filters, order_by="timestamp")
        return [decode_properties(n) for n in nodes]

    async def delete(self, transaction_id: str) -> None:
        """
        Delete a transaction and every edge touching it.

        TRANSFERRED_TO edges between its users are kept.

        Raises:
            NotFoundError: if the transaction does not exist
        """
        if not await self.graph.delete_node(TRANSACTION, transaction_id):
            raise NotFoundError(TRANSACTION, transaction_id)
        logger.info(f"Deleted transaction {transaction_id}")
