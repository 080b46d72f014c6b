"""
Tests for visualization graph assembly.
"""

import asyncio

import pytest

from fraudgraph.assembly.assembler import GraphAssembler, build_graph
from fraudgraph.errors import UpstreamStoreError


def _connections(user_id, connected=(), transactions=(), transfers=()):
    return {
        "user": {"id": user_id, "name": user_id.title()},
        "connectedUsers": list(connected),
        "transactions": list(transactions),
        "directTransfers": list(transfers),
    }


class TestBuildGraph:
    """Tests for the pure two-pass build."""

    def test_node_ids_and_dedup(self):
        """Users seen in several places become one node."""
        users = [{"id": "a", "name": "Ann"}, {"id": "b", "name": "Ben"}]
        txs = [{"id": "t1", "amount": 10.0}]
        connections = [
            _connections("a", connected=[{
                "user": {"id": "b", "name": "Ben B."},
                "relationship": {"type": "SHARES_EMAIL", "properties": {"email": "e"}},
            }]),
        ]

        graph = build_graph(users, txs, connections).to_dict()

        ids = [n["id"] for n in graph["nodes"]]
        assert ids == ["user-a", "user-b", "transaction-t1"]
        ben = next(n for n in graph["nodes"] if n["id"] == "user-b")
        assert ben["label"] == "Ben"
        assert graph["edges"] == [{
            "id": "user-a|user-b|SHARES_EMAIL|0",
            "source": "user-a",
            "target": "user-b",
            "kind": "SHARES_EMAIL",
            "properties": {"email": "e"},
        }]

    def test_nodes_added_from_connections(self):
        """Counterparts missing from the global lists still become nodes."""
        connections = [
            _connections("a", transactions=[{
                "transaction": {"id": "t9", "amount": 5.0},
                "connectedUser": {"id": "z", "name": "Zed"},
                "relationship": {"from": {"type": "SENT_MONEY", "properties": {}}, "to": None},
            }]),
        ]

        graph = build_graph([], [], connections).to_dict()

        assert {n["id"] for n in graph["nodes"]} == {"user-a", "transaction-t9", "user-z"}
        assert graph["edges"][0]["kind"] == "INVOLVED_IN"
        assert graph["edges"][0]["properties"] == {"role": "sender"}

    def test_dangling_edges_dropped(self):
        """Edges whose endpoint cannot be identified are never emitted."""
        connections = [
            _connections("a", connected=[{"user": {"name": "no id"}, "relationship": {}}]),
            {"user": None, "connectedUsers": [
                {"user": {"id": "b"}, "relationship": {"type": "SHARES_PHONE"}},
            ]},
        ]

        graph = build_graph([{"id": "a"}], [], connections)
        result = graph.to_dict()

        node_ids = {n["id"] for n in result["nodes"]}
        assert all(e["source"] in node_ids and e["target"] in node_ids for e in result["edges"])
        assert result["edges"] == []
        assert result["stats"]["droppedEdges"] == 2

    def test_only_outgoing_transfers_emitted(self):
        """An incoming transfer is drawn from the sender's own connections."""
        connections = [
            _connections("a", transfers=[
                {"user": {"id": "b"}, "transfers": [{"transactionId": "t1"}], "direction": "OUTGOING"},
                {"user": {"id": "c"}, "transfers": [{"transactionId": "t2"}], "direction": "INCOMING"},
            ]),
        ]

        result = build_graph([], [], connections).to_dict()

        assert [(e["source"], e["target"]) for e in result["edges"]] == [("user-a", "user-b")]
        assert result["edges"][0]["properties"]["count"] == 1
        assert "user-c" in {n["id"] for n in result["nodes"]}

    def test_repeated_results_deduplicated(self):
        """The same relationship result applied twice yields the same edges."""
        result = _connections("a", connected=[
            {"user": {"id": "b"}, "relationship": {"type": "SHARES_PHONE", "properties": {}}},
        ])

        graph = build_graph([], [], [result, result]).to_dict()

        assert graph["stats"]["edgeCount"] == 1
        assert graph["stats"]["nodeCount"] == 2


class TestGraphAssembler:
    """Tests for fan-out assembly over the services."""

    @pytest.fixture
    def assembler(self, user_service, transaction_service, relationship_service):
        return GraphAssembler(user_service, transaction_service, relationship_service, concurrency=4)

    @pytest.mark.asyncio
    async def test_assemble_sample_graph(self, seed_sample, assembler):
        await seed_sample()

        graph = await assembler.assemble()

        assert graph["stats"]["nodeCount"] == 17
        assert graph["stats"]["failedFetches"] == 0
        assert graph["stats"]["droppedEdges"] == 0
        node_ids = {n["id"] for n in graph["nodes"]}
        assert all(e["source"] in node_ids and e["target"] in node_ids for e in graph["edges"])
        assert len({e["id"] for e in graph["edges"]}) == len(graph["edges"])

    @pytest.mark.asyncio
    async def test_failed_fetch_isolated(self, seed_sample, assembler, relationship_service):
        """A failing user costs only that user's edges."""
        await seed_sample()
        fetch = relationship_service.user_connections

        async def flaky(user_id):
            if user_id == "user3":
                raise UpstreamStoreError("Neo4j query failed", "timeout")
            return await fetch(user_id)

        relationship_service.user_connections = flaky

        graph = await assembler.assemble()

        assert graph["stats"]["failedFetches"] == 1
        assert "user-user3" in {n["id"] for n in graph["nodes"]}
        assert not any(e["source"] == "user-user3" for e in graph["edges"])
        assert any(e["source"] == "user-user1" for e in graph["edges"])

    @pytest.mark.asyncio
    async def test_concurrency_bounded(self, user_service, transaction_service):
        """No more than `concurrency` fetches run at once."""
        for i in range(10):
            await user_service.upsert({"id": f"u{i}", "name": f"User {i}"})

        class CountingRelationships:
            def __init__(self):
                self.active = 0
                self.peak = 0

            async def user_connections(self, user_id):
                self.active += 1
                self.peak = max(self.peak, self.active)
                await asyncio.sleep(0)
                self.active -= 1
                return _connections(user_id)

        relationships = CountingRelationships()
        assembler = GraphAssembler(user_service, transaction_service, relationships, concurrency=3)

        graph = await assembler.assemble()

        assert relationships.peak <= 3
        assert graph["stats"]["nodeCount"] == 10
