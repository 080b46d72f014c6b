"""
Analytics API routes.

Provides:
- Shortest path between two users
- Transaction clusters by shared attribute
"""

from typing import Any, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from fraudgraph.analytics.clusters import DEFAULT_ATTRIBUTE, DEFAULT_MIN_CLUSTER_SIZE
from fraudgraph.api.deps import ClusterFinderDep, PathFinderDep

router = APIRouter()


class ShortestPathResponse(BaseModel):
    """Response for shortest path queries."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    path_exists: bool
    path_length: Optional[int] = None
    path: Optional[list[dict[str, Any]]] = None
    message: Optional[str] = None


class ClusterResponse(BaseModel):
    """One group of transactions sharing an attribute value."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    attribute: str
    value: Any
    transaction_ids: list[str]
    cluster_size: int


@router.get(
    "/shortestPath",
    response_model=ShortestPathResponse,
    response_model_exclude_none=True,
)
async def shortest_path(
    finder: PathFinderDep,
    source_user_id: Optional[str] = Query(None, alias="sourceUserId"),
    target_user_id: Optional[str] = Query(None, alias="targetUserId"),
    max_depth: Optional[int] = Query(None, alias="maxDepth", description="Hop bound"),
):
    """Find the fewest-hop path between two users over any relationship."""
    return await finder.shortest_path(source_user_id, target_user_id, max_depth)


@router.get("/clusters", response_model=list[ClusterResponse])
async def transaction_clusters(
    finder: ClusterFinderDep,
    attribute: str = Query(
        DEFAULT_ATTRIBUTE,
        description="ipAddress, deviceId, currency, status or amount",
    ),
    min_cluster_size: int = Query(DEFAULT_MIN_CLUSTER_SIZE, alias="minClusterSize"),
):
    """Group transactions that share an attribute value, largest first."""
    return await finder.find_clusters(attribute, min_cluster_size)
