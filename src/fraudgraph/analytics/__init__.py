"""
Graph analytics for FraudGraph.

- Bounded shortest path between users
- Transaction clusters by shared attribute
"""

from fraudgraph.analytics.clusters import CLUSTER_ATTRIBUTES, ClusterFinder
from fraudgraph.analytics.paths import PathFinder

__all__ = [
    "CLUSTER_ATTRIBUTES",
    "ClusterFinder",
    "PathFinder",
]
