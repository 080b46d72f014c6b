"""
Shortest path between users.

Finds the fewest-hop connection between two users over any edge kind,
ignoring edge direction, within a hop bound.
"""

import logging
from typing import Any, Optional

from fraudgraph.errors import NotFoundError, ValidationError
from fraudgraph.graph.client import GraphClient
from fraudgraph.graph.schema import USER, decode_properties, parse_positive_int

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 5

NO_PATH_MESSAGE = "No path found between the users"


class PathFinder:
    """Bounded shortest-path search between two users."""

    def __init__(self, graph: GraphClient, default_max_depth: int = DEFAULT_MAX_DEPTH):
        self.graph = graph
        self.default_max_depth = default_max_depth

    async def shortest_path(
        self,
        source_user_id: Optional[str],
        target_user_id: Optional[str],
        max_depth: Any = None,
    ) -> dict:
        """
        Find the shortest path between two users.

        Returns:
            {"pathExists": True, "pathLength": n, "path": [steps]} or
            {"pathExists": False, "message": ...}

        Raises:
            ValidationError: if an id is missing or max_depth is not positive
            NotFoundError: if either user does not exist
        """
        if not source_user_id or not target_user_id:
            raise ValidationError(
                "Source and target user IDs are required", field="sourceUserId"
            )
        depth = parse_positive_int(max_depth, "maxDepth", self.default_max_depth)

        for user_id in (source_user_id, target_user_id):
            if await self.graph.get_user(user_id) is None:
                raise NotFoundError(USER, user_id)

        if source_user_id == target_user_id:
            return {"pathExists": True, "pathLength": 0, "path": []}

        steps = await self.graph.shortest_path(
            USER, source_user_id, USER, target_user_id, depth
        )
        if steps is None:
            logger.debug(
                f"No path within {depth} hops between {source_user_id} and {target_user_id}"
            )
            return {"pathExists": False, "message": NO_PATH_MESSAGE}

        for step in steps:
            for end in ("from", "to"):
                step[end]["properties"] = decode_properties(step[end]["properties"])

        return {"pathExists": True, "pathLength": len(steps), "path": steps}
