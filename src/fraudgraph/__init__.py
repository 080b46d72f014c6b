"""
FraudGraph - Entity-Relationship Graph for Users and Transactions

A service that:
- Stores account-holders and money transfers as a property graph
- Infers links from shared identifying attributes and transaction metadata
- Answers path and cluster queries over the inferred network
- Assembles a deduplicated node/edge view for visualization and export
"""

__version__ = "0.1.0"
