"""
API route modules.
"""

from fraudgraph.api.routes.analytics import router as analytics_router
from fraudgraph.api.routes.export import router as export_router
from fraudgraph.api.routes.graph import router as graph_router
from fraudgraph.api.routes.relationships import router as relationships_router
from fraudgraph.api.routes.transactions import router as transactions_router
from fraudgraph.api.routes.users import router as users_router

__all__ = [
    "analytics_router",
    "export_router",
    "graph_router",
    "relationships_router",
    "transactions_router",
    "users_router",
]
