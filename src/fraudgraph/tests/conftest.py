"""
Pytest configuration and shared fixtures for FraudGraph tests.
"""

import pytest

from fraudgraph.analytics.clusters import ClusterFinder
from fraudgraph.analytics.paths import PathFinder
from fraudgraph.graph.client import GraphClient, NetworkXBackend
from fraudgraph.sample_data import SAMPLE_TRANSACTIONS, SAMPLE_USERS
from fraudgraph.services.export import ExportService
from fraudgraph.services.relationships import RelationshipService
from fraudgraph.services.transactions import TransactionService
from fraudgraph.services.users import UserService


@pytest.fixture
def graph() -> GraphClient:
    """Graph client over a fresh in-memory store."""
    return GraphClient(NetworkXBackend())


@pytest.fixture
def user_service(graph) -> UserService:
    return UserService(graph)


@pytest.fixture
def transaction_service(graph) -> TransactionService:
    return TransactionService(graph)


@pytest.fixture
def relationship_service(graph) -> RelationshipService:
    return RelationshipService(graph)


@pytest.fixture
def path_finder(graph) -> PathFinder:
    return PathFinder(graph)


@pytest.fixture
def cluster_finder(graph) -> ClusterFinder:
    return ClusterFinder(graph)


@pytest.fixture
def export_service(graph) -> ExportService:
    return ExportService(graph)


@pytest.fixture
def seed_sample(user_service, transaction_service):
    """Coroutine factory that loads the sample users and transactions."""

    async def _seed():
        for data in SAMPLE_USERS:
            await user_service.upsert(data)
        for data in SAMPLE_TRANSACTIONS:
            await transaction_service.upsert(data)

    return _seed


@pytest.fixture
def edges_of(graph):
    """Coroutine factory returning stored edges, optionally filtered by type."""

    async def _edges(kind=None):
        edges = await graph.list_edges()
        if kind is None:
            return edges
        return [e for e in edges if e["type"] == kind]

    return _edges


@pytest.fixture
def sample_user_payload() -> dict:
    """A user with every identifying attribute set."""
    return {
        "id": "u-alpha",
        "name": "Alpha User",
        "email": "alpha@example.com",
        "phone": "+15550000001",
        "address": {"street": "1 First Ave", "city": "Springfield", "country": "USA"},
        "paymentMethods": [
            {"type": "credit_card", "last4": "4242", "provider": "visa"},
        ],
    }
