"""
Graph layer for FraudGraph.

Node and edge types plus the graph client with Neo4j and NetworkX backends.
"""

from fraudgraph.graph.client import (
    GraphBackend,
    GraphClient,
    Neo4jBackend,
    NetworkXBackend,
    PropertyFilter,
    create_graph_client,
)
from fraudgraph.graph.edges import (
    Edge,
    EdgeKind,
    ReceivedByEdge,
    SentMoneyEdge,
    SharesAddressEdge,
    SharesDeviceEdge,
    SharesEmailEdge,
    SharesIpEdge,
    SharesLocationEdge,
    SharesPaymentMethodEdge,
    SharesPhoneEdge,
    TransferredToEdge,
)
from fraudgraph.graph.schema import (
    TRANSACTION,
    USER,
    Address,
    Location,
    PaymentMethod,
    Transaction,
    User,
    decode_properties,
)

__all__ = [
    "GraphBackend",
    "GraphClient",
    "Neo4jBackend",
    "NetworkXBackend",
    "PropertyFilter",
    "create_graph_client",
    "Edge",
    "EdgeKind",
    "ReceivedByEdge",
    "SentMoneyEdge",
    "SharesAddressEdge",
    "SharesDeviceEdge",
    "SharesEmailEdge",
    "SharesIpEdge",
    "SharesLocationEdge",
    "SharesPaymentMethodEdge",
    "SharesPhoneEdge",
    "TransferredToEdge",
    "TRANSACTION",
    "USER",
    "Address",
    "Location",
    "PaymentMethod",
    "Transaction",
    "User",
    "decode_properties",
]
