"""
Link inference for FraudGraph.

- Users sharing email, phone, address or a payment method
- Money flow between users through transactions
- Transactions sharing IP address, device or location
"""

from fraudgraph.linking.attribute_links import AttributeLinkDetector
from fraudgraph.linking.transaction_links import TransactionLinkDetector

__all__ = [
    "AttributeLinkDetector",
    "TransactionLinkDetector",
]
