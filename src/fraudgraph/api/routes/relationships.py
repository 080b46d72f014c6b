"""
Relationship API routes.
"""

from typing import Any

from fastapi import APIRouter

from fraudgraph.api.deps import RelationshipServiceDep

router = APIRouter()


@router.get("/user/{user_id}")
async def get_user_connections(
    user_id: str,
    relationships: RelationshipServiceDep,
) -> dict[str, Any]:
    """
    Get a user's connections.

    Returns users linked by shared attributes or transfers, transactions the
    user took part in with their counterparts, and direct transfers grouped
    by counterpart.
    """
    return await relationships.user_connections(user_id)


@router.get("/transaction/{transaction_id}")
async def get_transaction_connections(
    transaction_id: str,
    relationships: RelationshipServiceDep,
) -> dict[str, Any]:
    """Get the users involved in a transaction and its linked transactions."""
    return await relationships.transaction_connections(transaction_id)
