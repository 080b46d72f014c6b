"""
FastAPI dependencies for the API.

Provides:
- The shared graph client created at startup
- Services and analytics components bound to that client
"""

from typing import Annotated

from fastapi import Depends, Request

from fraudgraph.analytics.clusters import ClusterFinder
from fraudgraph.analytics.paths import PathFinder
from fraudgraph.assembly.assembler import GraphAssembler
from fraudgraph.config import settings
from fraudgraph.graph.client import GraphClient
from fraudgraph.services.export import ExportService
from fraudgraph.services.relationships import RelationshipService
from fraudgraph.services.transactions import TransactionService
from fraudgraph.services.users import UserService


def get_graph_client(request: Request) -> GraphClient:
    """Graph client opened by the application lifespan."""
    return request.app.state.graph


GraphClientDep = Annotated[GraphClient, Depends(get_graph_client)]


def get_user_service(graph: GraphClientDep) -> UserService:
    return UserService(graph)


def get_transaction_service(graph: GraphClientDep) -> TransactionService:
    return TransactionService(graph)


def get_relationship_service(graph: GraphClientDep) -> RelationshipService:
    return RelationshipService(graph)


def get_path_finder(graph: GraphClientDep) -> PathFinder:
    return PathFinder(graph, default_max_depth=settings.default_max_depth)


def get_cluster_finder(graph: GraphClientDep) -> ClusterFinder:
    return ClusterFinder(graph)


def get_export_service(graph: GraphClientDep) -> ExportService:
    return ExportService(graph)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
RelationshipServiceDep = Annotated[RelationshipService, Depends(get_relationship_service)]
PathFinderDep = Annotated[PathFinder, Depends(get_path_finder)]
ClusterFinderDep = Annotated[ClusterFinder, Depends(get_cluster_finder)]
ExportServiceDep = Annotated[ExportService, Depends(get_export_service)]


def get_graph_assembler(
    users: UserServiceDep,
    transactions: TransactionServiceDep,
    relationships: RelationshipServiceDep,
) -> GraphAssembler:
    return GraphAssembler(
        users,
        transactions,
        relationships,
        concurrency=settings.effective_assembly_concurrency,
    )


GraphAssemblerDep = Annotated[GraphAssembler, Depends(get_graph_assembler)]
