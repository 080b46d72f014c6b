"""
Graph visualization routes.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from fraudgraph.api.deps import GraphAssemblerDep

router = APIRouter()


class FullGraphResponse(BaseModel):
    """Response for full graph visualization."""
    nodes: list[dict]
    edges: list[dict]
    stats: dict


@router.get("/full", response_model=FullGraphResponse)
async def get_full_graph(assembler: GraphAssemblerDep):
    """
    Get the complete graph for visualization.

    Relationship fetches that fail are counted in stats.failedFetches; the
    rest of the graph is still returned.
    """
    return await assembler.assemble()
