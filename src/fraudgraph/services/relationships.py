"""
Relationship queries.

Answers "who and what is this user or transaction connected to" from the
edges stored around it.
"""

import logging

from fraudgraph.errors import NotFoundError
from fraudgraph.graph.client import GraphClient
from fraudgraph.graph.edges import EdgeKind
from fraudgraph.graph.schema import TRANSACTION, USER, decode_properties

logger = logging.getLogger(__name__)

OUTGOING = "OUTGOING"
INCOMING = "INCOMING"


def _relationship(neighbor: dict) -> dict:
    return {"type": neighbor["edge_type"], "properties": neighbor["edge"]}


class RelationshipService:
    """Connection views for users and transactions."""

    def __init__(self, graph: GraphClient):
        self.graph = graph

    async def user_connections(self, user_id: str) -> dict:
        """
        Get everything a user is connected to.

        Returns:
            {
                "user": {...},
                "connectedUsers": [{"user", "relationship"}],
                "transactions": [{"transaction", "connectedUser", "relationship": {"from", "to"}}],
                "directTransfers": [{"user", "transfers", "direction"}],
            }

        Raises:
            NotFoundError: if the user does not exist
        """
        user = await self.graph.get_user(user_id)
        if user is None:
            raise NotFoundError(USER, user_id)

        outgoing_users = await self.graph.get_neighbors(
            USER, user_id, direction="out", neighbor_label=USER
        )
        connected_users = [
            {"user": decode_properties(n["m"]), "relationship": _relationship(n)}
            for n in outgoing_users
        ]

        return {
            "user": decode_properties(user),
            "connectedUsers": connected_users,
            "transactions": await self._user_transactions(user_id),
            "directTransfers": await self._direct_transfers(user_id),
        }

    async def _user_transactions(self, user_id: str) -> list[dict]:
        """Transactions the user sent or received, each with its counterpart user."""
        entries = []

        sent = await self.graph.get_neighbors(
            USER, user_id, [EdgeKind.SENT_MONEY.value], "out", TRANSACTION
        )
        for n in sent:
            receivers = await self.graph.get_neighbors(
                TRANSACTION, n["m"]["id"], [EdgeKind.RECEIVED_BY.value], "out", USER
            )
            entries.extend(self._transaction_entries(n, receivers))

        received = await self.graph.get_neighbors(
            USER, user_id, [EdgeKind.RECEIVED_BY.value], "in", TRANSACTION
        )
        for n in received:
            senders = await self.graph.get_neighbors(
                TRANSACTION, n["m"]["id"], [EdgeKind.SENT_MONEY.value], "in", USER
            )
            entries.extend(self._transaction_entries(n, senders))

        return entries

    @staticmethod
    def _transaction_entries(own: dict, counterparts: list[dict]) -> list[dict]:
        transaction = decode_properties(own["m"])
        if not counterparts:
            return [{
                "transaction": transaction,
                "connectedUser": None,
                "relationship": {"from": _relationship(own), "to": None},
            }]
        return [
            {
                "transaction": transaction,
                "connectedUser": decode_properties(c["m"]),
                "relationship": {"from": _relationship(own), "to": _relationship(c)},
            }
            for c in counterparts
        ]

    async def _direct_transfers(self, user_id: str) -> list[dict]:
        """TRANSFERRED_TO edges grouped by counterpart and direction."""
        neighbors = await self.graph.get_neighbors(
            USER, user_id, [EdgeKind.TRANSFERRED_TO.value], "both", USER
        )
        groups: dict[tuple[str, str], dict] = {}
        for n in neighbors:
            direction = OUTGOING if n["direction"] == "out" else INCOMING
            key = (n["m"]["id"], direction)
            if key not in groups:
                groups[key] = {
                    "user": decode_properties(n["m"]),
                    "transfers": [],
                    "direction": direction,
                }
            groups[key]["transfers"].append(n["edge"])
        return list(groups.values())

    async def transaction_connections(self, transaction_id: str) -> dict:
        """
        Get the users involved in a transaction and the transactions linked to it.

        Returns:
            {
                "transaction": {...},
                "involvedUsers": [{"sender", "receiver", "relationships": {"sent", "received"}}],
                "relatedTransactions": [{"transaction", "relationship"}],
            }

        Raises:
            NotFoundError: if the transaction does not exist
        """
        transaction = await self.graph.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(TRANSACTION, transaction_id)

        senders = await self.graph.get_neighbors(
            TRANSACTION, transaction_id, [EdgeKind.SENT_MONEY.value], "in", USER
        )
        receivers = await self.graph.get_neighbors(
            TRANSACTION, transaction_id, [EdgeKind.RECEIVED_BY.value], "out", USER
        )
        related = await self.graph.get_neighbors(
            TRANSACTION, transaction_id, direction="out", neighbor_label=TRANSACTION
        )

        return {
            "transaction": decode_properties(transaction),
            "involvedUsers": self._involved_users(senders, receivers),
            "relatedTransactions": [
                {"transaction": decode_properties(n["m"]), "relationship": _relationship(n)}
                for n in related
            ],
        }

    @staticmethod
    def _involved_users(senders: list[dict], receivers: list[dict]) -> list[dict]:
        involved = []
        for sender in senders or [None]:
            for receiver in receivers or [None]:
                if sender is None and receiver is None:
                    continue
                involved.append({
                    "sender": decode_properties(sender["m"]) if sender else None,
                    "receiver": decode_properties(receiver["m"]) if receiver else None,
                    "relationships": {
                        "sent": _relationship(sender) if sender else None,
                        "received": _relationship(receiver) if receiver else None,
                    },
                })
        return involved
