"""
Graph assembly for visualization.

Fetches all users, all transactions and every user's connections, then
builds a deduplicated node/edge view. A failed fetch for one user costs
only that user's edges.

Node ids are "user-<id>" and "transaction-<id>". Every edge is emitted from
the user whose connections were fetched, so the edge set does not depend on
whether the counterpart's fetch succeeded.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from fraudgraph.graph.edges import EdgeKind
from fraudgraph.graph.schema import TRANSACTION, USER
from fraudgraph.services.relationships import OUTGOING, RelationshipService
from fraudgraph.services.transactions import TransactionService
from fraudgraph.services.users import UserService

logger = logging.getLogger(__name__)

INVOLVED_IN = "INVOLVED_IN"


def user_node_id(user_id: str) -> str:
    return f"user-{user_id}"


def transaction_node_id(transaction_id: str) -> str:
    return f"transaction-{transaction_id}"


@dataclass
class AssembledGraph:
    """Deduplicated nodes and edges ready for rendering."""

    nodes: dict[str, dict] = field(default_factory=dict)
    edges: dict[tuple, dict] = field(default_factory=dict)
    dropped_edges: int = 0
    failed_fetches: int = 0

    def add_node(self, kind: str, record: Optional[dict]) -> None:
        """Add a node; the first record seen for an id keeps its label."""
        if not record or not record.get("id"):
            return
        node_id = (user_node_id if kind == USER else transaction_node_id)(record["id"])
        existing = self.nodes.get(node_id)
        if existing is None:
            label = record.get("name") if kind == USER else record.get("amount")
            self.nodes[node_id] = {
                "id": node_id,
                "kind": kind,
                "label": str(label if label is not None else record["id"]),
                "data": dict(record),
            }
        else:
            for key, value in record.items():
                existing["data"].setdefault(key, value)

    def add_edge(
        self,
        source: Optional[str],
        target: Optional[str],
        kind: str,
        ordinal: int,
        properties: Optional[dict] = None,
    ) -> None:
        """Add an edge unless an endpoint is missing from the node set."""
        if source not in self.nodes or target is None or target not in self.nodes:
            self.dropped_edges += 1
            logger.warning(f"Dropped {kind} edge {source} -> {target}: endpoint not found")
            return
        key = (source, target, kind, ordinal)
        if key not in self.edges:
            self.edges[key] = {
                "id": f"{source}|{target}|{kind}|{ordinal}",
                "source": source,
                "target": target,
                "kind": kind,
                "properties": properties or {},
            }

    def to_dict(self) -> dict:
        return {
            "nodes": list(self.nodes.values()),
            "edges": list(self.edges.values()),
            "stats": {
                "nodeCount": len(self.nodes),
                "edgeCount": len(self.edges),
                "droppedEdges": self.dropped_edges,
                "failedFetches": self.failed_fetches,
            },
        }


def _record_id(record: Optional[dict]) -> Optional[str]:
    return record.get("id") if record else None


def build_graph(
    users: list[dict],
    transactions: list[dict],
    connections: list[dict],
) -> AssembledGraph:
    """
    Build the node/edge view from fetched records.

    Args:
        users: all user records
        transactions: all transaction records
        connections: user_connections results for the users that were fetched

    Returns:
        AssembledGraph where every edge endpoint is a node
    """
    graph = AssembledGraph()

    # Node pass
    for user in users:
        graph.add_node(USER, user)
    for tx in transactions:
        graph.add_node(TRANSACTION, tx)
    for result in connections:
        graph.add_node(USER, result.get("user"))
        for entry in result.get("connectedUsers", []):
            graph.add_node(USER, entry.get("user"))
        for entry in result.get("transactions", []):
            graph.add_node(TRANSACTION, entry.get("transaction"))
            graph.add_node(USER, entry.get("connectedUser"))
        for entry in result.get("directTransfers", []):
            graph.add_node(USER, entry.get("user"))

    # Edge pass
    for result in connections:
        owner_id = _record_id(result.get("user"))
        source = user_node_id(owner_id) if owner_id else None

        for i, entry in enumerate(result.get("connectedUsers", [])):
            relationship = entry.get("relationship") or {}
            # Transfers are drawn once per counterpart from directTransfers
            if relationship.get("type") == EdgeKind.TRANSFERRED_TO.value:
                continue
            target_id = _record_id(entry.get("user"))
            graph.add_edge(
                source,
                user_node_id(target_id) if target_id else None,
                relationship.get("type") or "CONNECTED",
                i,
                relationship.get("properties"),
            )

        for i, entry in enumerate(result.get("transactions", [])):
            target_id = _record_id(entry.get("transaction"))
            sent = (entry.get("relationship") or {}).get("from") or {}
            role = "sender" if sent.get("type") == EdgeKind.SENT_MONEY.value else "receiver"
            graph.add_edge(
                source,
                transaction_node_id(target_id) if target_id else None,
                INVOLVED_IN,
                i,
                {"role": role},
            )

        for i, entry in enumerate(result.get("directTransfers", [])):
            # Incoming transfers are emitted from the sender's own result
            if entry.get("direction") != OUTGOING:
                continue
            target_id = _record_id(entry.get("user"))
            transfers = entry.get("transfers", [])
            graph.add_edge(
                source,
                user_node_id(target_id) if target_id else None,
                EdgeKind.TRANSFERRED_TO.value,
                i,
                {"transfers": transfers, "count": len(transfers)},
            )

    return graph


class GraphAssembler:
    """
    Fan-out graph assembly over the relationship service.

    Usage:
        assembler = GraphAssembler(users, transactions, relationships, concurrency=50)
        view = await assembler.assemble()
    """

    def __init__(
        self,
        users: UserService,
        transactions: TransactionService,
        relationships: RelationshipService,
        concurrency: int = 10,
    ):
        self.users = users
        self.transactions = transactions
        self.relationships = relationships
        self.concurrency = max(1, concurrency)

    async def fetch_connections(self, user_ids: list[str]) -> tuple[list[dict], int]:
        """
        Fetch connections for every user with bounded concurrency.

        Returns:
            (successful results, number of failed fetches)
        """
        semaphore = asyncio.Semaphore(self.concurrency)

        async def fetch_one(user_id: str) -> dict:
            async with semaphore:
                return await self.relationships.user_connections(user_id)

        outcomes = await asyncio.gather(
            *(fetch_one(user_id) for user_id in user_ids),
            return_exceptions=True,
        )

        results = []
        failed = 0
        for user_id, outcome in zip(user_ids, outcomes):
            if isinstance(outcome, BaseException):
                failed += 1
                logger.warning(f"Failed to fetch connections for user {user_id}: {outcome}")
            else:
                results.append(outcome)
        return results, failed

    async def assemble(self) -> dict[str, Any]:
        """
        Assemble the full graph view.

        Returns:
            {"nodes": [...], "edges": [...], "stats": {...}}
        """
        users = await self.users.list_users()
        transactions = await self.transactions.list_transactions()

        connections, failed = await self.fetch_connections([u["id"] for u in users])
        graph = build_graph(users, transactions, connections)
        graph.failed_fetches = failed

        logger.info(
            f"Assembled graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges, "
            f"{graph.dropped_edges} dropped, {failed} failed fetches"
        )
        return graph.to_dict()
