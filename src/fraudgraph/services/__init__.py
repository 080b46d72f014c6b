"""
Application services for FraudGraph.
"""

from fraudgraph.services.export import ExportFormat, ExportResult, ExportService
from fraudgraph.services.relationships import RelationshipService
from fraudgraph.services.transactions import TransactionService
from fraudgraph.services.users import UserService

__all__ = [
    "ExportFormat",
    "ExportResult",
    "ExportService",
    "RelationshipService",
    "TransactionService",
    "UserService",
]
