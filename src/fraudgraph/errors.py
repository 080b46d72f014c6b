"""
Error taxonomy for FraudGraph.

Validation failures are raised before the store is touched, missing
entities are reported separately from bad input, and store failures
carry the underlying driver detail.
"""

from typing import Optional


class FraudGraphError(Exception):
    """Base class for all FraudGraph errors."""

    pass


class ValidationError(FraudGraphError):
    """Raised when required input is missing or malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class NotFoundError(FraudGraphError):
    """Raised when a referenced User or Transaction does not exist."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class UpstreamStoreError(FraudGraphError):
    """Raised when the graph store fails to execute a query."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message if detail is None else f"{message}: {detail}")
        self.message = message
        self.detail = detail


class SchemaSetupError(UpstreamStoreError):
    """Raised when uniqueness constraints could not be installed at startup."""

    pass
