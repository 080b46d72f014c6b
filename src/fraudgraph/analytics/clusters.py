"""
Transaction clustering by identical attribute value.

Groups transactions sharing an ipAddress, deviceId, currency, status or
amount, largest groups first.
"""

import logging
from typing import Any

from fraudgraph.errors import ValidationError
from fraudgraph.graph.client import GraphClient
from fraudgraph.graph.schema import TRANSACTION, parse_positive_int

logger = logging.getLogger(__name__)

CLUSTER_ATTRIBUTES = ("ipAddress", "deviceId", "currency", "status", "amount")
DEFAULT_ATTRIBUTE = "ipAddress"
DEFAULT_MIN_CLUSTER_SIZE = 2


class ClusterFinder:
    """Finds groups of transactions sharing a whitelisted attribute."""

    def __init__(self, graph: GraphClient):
        self.graph = graph

    async def find_clusters(
        self,
        attribute: str = DEFAULT_ATTRIBUTE,
        min_cluster_size: Any = DEFAULT_MIN_CLUSTER_SIZE,
    ) -> list[dict]:
        """
        Group transactions by attribute.

        Returns:
            [{"attribute", "value", "transactionIds", "clusterSize"}] sorted by
            clusterSize descending

        Raises:
            ValidationError: if the attribute is not whitelisted or the
                minimum size is not positive
        """
        if attribute not in CLUSTER_ATTRIBUTES:
            raise ValidationError(
                f"Invalid attribute. Must be one of: {', '.join(CLUSTER_ATTRIBUTES)}",
                field="attribute",
            )
        min_size = parse_positive_int(
            min_cluster_size, "minClusterSize", DEFAULT_MIN_CLUSTER_SIZE
        )

        groups = await self.graph.group_by_property(TRANSACTION, attribute, min_size)
        clusters = [
            {
                "attribute": attribute,
                "value": group["value"],
                "transactionIds": group["ids"],
                "clusterSize": len(group["ids"]),
            }
            for group in groups
        ]
        clusters.sort(key=lambda c: c["clusterSize"], reverse=True)

        logger.debug(f"Found {len(clusters)} {attribute} cluster(s) of size >= {min_size}")
        return clusters
