#!/usr/bin/env python3
"""
Seed the graph store with sample users and transactions.

Clears the configured store, then writes the sample data through the
services so that link inference runs exactly as it does for API writes.
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fraudgraph.config import settings
from fraudgraph.graph.client import create_graph_client
from fraudgraph.sample_data import SAMPLE_TRANSACTIONS, SAMPLE_USERS
from fraudgraph.services.transactions import TransactionService
from fraudgraph.services.users import UserService


async def main():
    """Main entry point."""
    print("=" * 60)
    print("FraudGraph - Seed Sample Data")
    print("=" * 60)
    print(f"Backend: {settings.graph_backend}")

    graph = create_graph_client(
        settings.graph_backend,
        uri=settings.neo4j_uri,
        user=settings.neo4j_user,
        password=settings.neo4j_password,
        database=settings.neo4j_database,
    )
    await graph.connect_with_retry(
        max_attempts=settings.schema_setup_max_attempts,
        backoff_base=settings.schema_setup_backoff_base,
    )

    try:
        print("\nClearing graph...")
        await graph.clear()
        print("✓ Graph cleared")

        users = UserService(graph)
        print(f"\nCreating {len(SAMPLE_USERS)} users...")
        for data in SAMPLE_USERS:
            user = await users.upsert(data)
            print(f"  ✓ {user['name']} ({user['id']})")

        transactions = TransactionService(graph)
        print(f"\nCreating {len(SAMPLE_TRANSACTIONS)} transactions...")
        for data in SAMPLE_TRANSACTIONS:
            tx = await transactions.upsert(data)
            print(f"  ✓ {tx['id']}: {data['fromUserId']} -> {data['toUserId']} ({tx['amount']} {tx['currency']})")

        stats = await graph.get_statistics()
        print("\n" + "=" * 60)
        print("Seeding complete!")
        print(f"  Nodes: {stats['nodes']}")
        print(f"  Edges: {stats['edges']}")
        print("=" * 60)
    finally:
        await graph.close()


if __name__ == "__main__":
    asyncio.run(main())
