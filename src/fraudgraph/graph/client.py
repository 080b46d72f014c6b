"""
Graph Client for FraudGraph.

Provides a unified interface for graph operations, supporting a Neo4j
backend for production and an in-memory NetworkX backend for development
and tests.

Backends speak in stored property maps: structured attributes are kept as
canonical JSON text and are decoded by the service layer.
"""

import asyncio
import copy
import logging
import operator
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import networkx as nx
from neo4j import AsyncGraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from fraudgraph.errors import SchemaSetupError, UpstreamStoreError
from fraudgraph.graph.edges import Edge
from fraudgraph.graph.schema import NODE_LABELS, TRANSACTION, USER, canonical_json

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DIRECTIONS = ("out", "in", "both")


def _check_label(label: str) -> str:
    if label not in NODE_LABELS:
        raise ValueError(f"Unknown node label: {label}")
    return label


def _check_key(key: str) -> str:
    if not _IDENTIFIER.match(key):
        raise ValueError(f"Invalid property key: {key}")
    return key


@dataclass
class PropertyFilter:
    """A single property predicate for list queries."""
    key: str
    value: Any
    op: str = "="

    OPERATORS = {"=": operator.eq, ">=": operator.ge, "<=": operator.le}

    def __post_init__(self):
        _check_key(self.key)
        if self.op not in self.OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op}")

    def matches(self, props: dict) -> bool:
        value = props.get(self.key)
        if value is None:
            return False
        try:
            return self.OPERATORS[self.op](value, self.value)
        except TypeError:
            return False


class GraphBackend(ABC):
    """Abstract base class for graph database backends."""

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to the graph database."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the database connection."""
        pass

    @abstractmethod
    async def setup_schema(self) -> None:
        """Install uniqueness constraints on User.id and Transaction.id."""
        pass

    @abstractmethod
    async def upsert_node(self, label: str, node_id: str, properties: dict) -> dict:
        """
        Create or update a node by id and return its stored properties.

        On update, supplied properties overwrite stored ones, others are kept,
        and createdAt is never replaced.
        """
        pass

    @abstractmethod
    async def get_node(self, label: str, node_id: str) -> Optional[dict]:
        """Get a node by ID."""
        pass

    @abstractmethod
    async def delete_node(self, label: str, node_id: str) -> bool:
        """Delete a node and every edge incident to it. Returns False if absent."""
        pass

    @abstractmethod
    async def list_nodes(
        self,
        label: str,
        filters: Optional[list[PropertyFilter]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
    ) -> list[dict]:
        """List nodes of a label matching all filters."""
        pass

    @abstractmethod
    async def find_matching_nodes(
        self,
        label: str,
        key: str,
        value: Any,
        exclude_id: Optional[str] = None,
        contains: bool = False,
    ) -> list[dict]:
        """
        Find nodes whose property equals value.

        With contains=True the stored property is a list and must include value.
        """
        pass

    @abstractmethod
    async def merge_edge(self, edge: Edge) -> bool:
        """
        Ensure the edge exists. Returns False when an endpoint is missing,
        in which case nothing is written.
        """
        pass

    @abstractmethod
    async def get_neighbors(
        self,
        label: str,
        node_id: str,
        edge_types: Optional[list[str]] = None,
        direction: str = "both",
        neighbor_label: Optional[str] = None,
    ) -> list[dict]:
        """
        Get neighboring nodes.

        Each entry holds the neighbor ("m"), its label ("m_label"), the edge
        type and properties, and the direction seen from the start node.
        """
        pass

    @abstractmethod
    async def shortest_path(
        self,
        from_label: str,
        from_id: str,
        to_label: str,
        to_id: str,
        max_depth: int,
    ) -> Optional[list[dict]]:
        """
        Find a fewest-hop path ignoring edge direction, bounded by max_depth.

        Returns the path as a list of steps, or None when no path exists.
        """
        pass

    @abstractmethod
    async def group_by_property(self, label: str, key: str, min_size: int) -> list[dict]:
        """Group node ids by a property value, keeping groups of at least min_size."""
        pass

    @abstractmethod
    async def list_edges(self) -> list[dict]:
        """List every edge with its endpoint labels and ids."""
        pass

    @abstractmethod
    async def get_statistics(self) -> dict:
        """Count nodes per label and edges per type."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove every node and edge."""
        pass


class Neo4jBackend(GraphBackend):
    """
    Neo4j graph database backend for production use.

    Features:
    - Connection pooling
    - Uniqueness constraints installed on connect
    - One session per operation
    """

    SCHEMA_QUERIES = [
        "CREATE CONSTRAINT user_id_unique IF NOT EXISTS FOR (u:User) REQUIRE u.id IS UNIQUE",
        "CREATE CONSTRAINT transaction_id_unique IF NOT EXISTS FOR (t:Transaction) REQUIRE t.id IS UNIQUE",
        "CREATE INDEX user_email IF NOT EXISTS FOR (u:User) ON (u.email)",
        "CREATE INDEX user_phone IF NOT EXISTS FOR (u:User) ON (u.phone)",
        "CREATE INDEX transaction_ip IF NOT EXISTS FOR (t:Transaction) ON (t.ipAddress)",
        "CREATE INDEX transaction_device IF NOT EXISTS FOR (t:Transaction) ON (t.deviceId)",
    ]

    def __init__(
        self,
        uri: str,
        user: str,
        password: str,
        database: str = "neo4j",
        max_connection_pool_size: int = 50,
        connection_timeout: float = 30.0,
        auto_setup_schema: bool = True,
    ):
        self.uri = uri
        self.user = user
        self.password = password
        self.database = database
        self.max_connection_pool_size = max_connection_pool_size
        self.connection_timeout = connection_timeout
        self.auto_setup_schema = auto_setup_schema
        self._driver = None
        self._schema_initialized = False

    async def connect(self) -> None:
        """Connect to Neo4j with connection pooling."""
        try:
            self._driver = AsyncGraphDatabase.driver(
                self.uri,
                auth=(self.user, self.password),
                max_connection_pool_size=self.max_connection_pool_size,
                connection_timeout=self.connection_timeout,
            )
            await self._driver.verify_connectivity()
        except (Neo4jError, DriverError, OSError) as e:
            logger.error(f"Failed to connect to Neo4j at {self.uri}: {e}")
            raise UpstreamStoreError("Failed to connect to Neo4j", str(e)) from e

        logger.info(f"Connected to Neo4j at {self.uri}")

        if self.auto_setup_schema and not self._schema_initialized:
            await self.setup_schema()

    async def setup_schema(self) -> None:
        """Create constraints and indexes."""
        logger.info("Setting up Neo4j schema...")
        for query in self.SCHEMA_QUERIES:
            await self.execute(query)
        self._schema_initialized = True
        logger.info("Neo4j schema setup complete")

    async def close(self) -> None:
        """Close Neo4j connection."""
        if self._driver:
            await self._driver.close()
            self._driver = None
            logger.info("Neo4j connection closed")

    def _session(self):
        if not self._driver:
            raise UpstreamStoreError("Not connected to Neo4j")
        return self._driver.session(database=self.database)

    async def execute(self, query: str, params: Optional[dict] = None) -> list[dict]:
        """Execute a Cypher query."""
        try:
            async with self._session() as session:
                result = await session.run(query, params or {})
                return await result.data()
        except (Neo4jError, DriverError) as e:
            logger.error(f"Neo4j query failed: {e}")
            raise UpstreamStoreError("Neo4j query failed", str(e)) from e

    async def execute_write(self, query: str, params: Optional[dict] = None) -> list[dict]:
        """Execute a write transaction."""

        async def _tx_func(tx):
            result = await tx.run(query, params or {})
            return await result.data()

        try:
            async with self._session() as session:
                return await session.execute_write(_tx_func)
        except (Neo4jError, DriverError) as e:
            logger.error(f"Neo4j write failed: {e}")
            raise UpstreamStoreError("Neo4j write failed", str(e)) from e

    async def upsert_node(self, label: str, node_id: str, properties: dict) -> dict:
        """Create or update a node with MERGE."""
        _check_label(label)
        update = {k: v for k, v in properties.items() if k != "createdAt"}
        query = f"""
        MERGE (n:{label} {{id: $id}})
        ON CREATE SET n = $props
        ON MATCH SET n += $update
        RETURN n
        """
        result = await self.execute_write(
            query, {"id": node_id, "props": properties, "update": update}
        )
        return dict(result[0]["n"]) if result else dict(properties)

    async def get_node(self, label: str, node_id: str) -> Optional[dict]:
        """Get a node by ID."""
        query = f"""
        MATCH (n:{_check_label(label)} {{id: $id}})
        RETURN n
        """
        result = await self.execute(query, {"id": node_id})
        return dict(result[0]["n"]) if result else None

    async def delete_node(self, label: str, node_id: str) -> bool:
        """Detach-delete a node."""
        query = f"""
        MATCH (n:{_check_label(label)} {{id: $id}})
        DETACH DELETE n
        RETURN count(n) AS count
        """
        result = await self.execute_write(query, {"id": node_id})
        return bool(result and result[0]["count"])

    async def list_nodes(
        self,
        label: str,
        filters: Optional[list[PropertyFilter]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
    ) -> list[dict]:
        """List nodes with optional property filters and ordering."""
        params = {}
        conditions = []
        for i, f in enumerate(filters or []):
            conditions.append(f"n.{f.key} {f.op} $p{i}")
            params[f"p{i}"] = f.value

        query = f"MATCH (n:{_check_label(label)})"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " RETURN n"
        if order_by:
            query += f" ORDER BY n.{_check_key(order_by)} {'DESC' if descending else 'ASC'}"

        results = await self.execute(query, params)
        return [dict(r["n"]) for r in results]

    async def find_matching_nodes(
        self,
        label: str,
        key: str,
        value: Any,
        exclude_id: Optional[str] = None,
        contains: bool = False,
    ) -> list[dict]:
        """Scan nodes for an identical attribute value."""
        key = _check_key(key)
        predicate = f"$value IN n.{key}" if contains else f"n.{key} = $value"
        query = f"""
        MATCH (n:{_check_label(label)})
        WHERE {predicate} AND ($exclude_id IS NULL OR n.id <> $exclude_id)
        RETURN n
        """
        results = await self.execute(query, {"value": value, "exclude_id": exclude_id})
        return [dict(r["n"]) for r in results]

    async def merge_edge(self, edge: Edge) -> bool:
        """MERGE an edge keyed on its full property map."""
        props = edge.properties()
        params = {f"p_{key}": value for key, value in props.items()}
        prop_map = ", ".join(f"{_check_key(key)}: $p_{key}" for key in props)
        query = f"""
        MATCH (a:{_check_label(edge.from_label)} {{id: $from_id}})
        MATCH (b:{_check_label(edge.to_label)} {{id: $to_id}})
        MERGE (a)-[r:{edge.kind.value} {{{prop_map}}}]->(b)
        RETURN count(r) AS merged
        """
        params.update({"from_id": edge.from_id, "to_id": edge.to_id})
        result = await self.execute_write(query, params)
        return bool(result and result[0]["merged"])

    async def get_neighbors(
        self,
        label: str,
        node_id: str,
        edge_types: Optional[list[str]] = None,
        direction: str = "both",
        neighbor_label: Optional[str] = None,
    ) -> list[dict]:
        """Get neighboring nodes."""
        edge_filter = ""
        if edge_types:
            edge_filter = ":" + "|".join(_check_key(t) for t in edge_types)
        target = f"(m:{_check_label(neighbor_label)})" if neighbor_label else "(m)"

        if direction == "out":
            pattern = f"(n)-[r{edge_filter}]->{target}"
        elif direction == "in":
            pattern = f"(n)<-[r{edge_filter}]-{target}"
        else:
            pattern = f"(n)-[r{edge_filter}]-{target}"

        query = f"""
        MATCH (n:{_check_label(label)} {{id: $id}})
        MATCH {pattern}
        RETURN m, labels(m) AS labels, type(r) AS edge_type,
               properties(r) AS edge, startNode(r) = n AS outgoing
        """
        results = await self.execute(query, {"id": node_id})
        return [
            {
                "m": dict(row["m"]),
                "m_label": row["labels"][0] if row["labels"] else "Unknown",
                "edge_type": row["edge_type"],
                "edge": dict(row["edge"] or {}),
                "direction": "out" if row["outgoing"] else "in",
            }
            for row in results
        ]

    async def shortest_path(
        self,
        from_label: str,
        from_id: str,
        to_label: str,
        to_id: str,
        max_depth: int,
    ) -> Optional[list[dict]]:
        """Find shortest path with Cypher shortestPath."""
        query = f"""
        MATCH (source:{_check_label(from_label)} {{id: $from_id}})
        MATCH (target:{_check_label(to_label)} {{id: $to_id}})
        MATCH path = shortestPath((source)-[*..{int(max_depth)}]-(target))
        RETURN path
        """
        try:
            async with self._session() as session:
                result = await session.run(query, {"from_id": from_id, "to_id": to_id})
                record = await result.single()
        except (Neo4jError, DriverError) as e:
            logger.error(f"Neo4j path query failed: {e}")
            raise UpstreamStoreError("Neo4j query failed", str(e)) from e

        if record is None:
            return None

        path = record["path"]
        nodes = list(path.nodes)
        return [
            {
                "from": self._node_view(nodes[i]),
                "relationship": {"type": rel.type, "properties": dict(rel)},
                "to": self._node_view(nodes[i + 1]),
            }
            for i, rel in enumerate(path.relationships)
        ]

    @staticmethod
    def _node_view(node) -> dict:
        labels = list(node.labels)
        return {
            "id": node.get("id"),
            "type": labels[0] if labels else "Unknown",
            "properties": dict(node),
        }

    async def group_by_property(self, label: str, key: str, min_size: int) -> list[dict]:
        """Group nodes by an identical property value."""
        key = _check_key(key)
        query = f"""
        MATCH (n:{_check_label(label)})
        WHERE n.{key} IS NOT NULL
        WITH n.{key} AS value, collect(n.id) AS ids
        WHERE size(ids) >= $min_size
        RETURN value, ids
        ORDER BY size(ids) DESC
        """
        results = await self.execute(query, {"min_size": min_size})
        return [{"value": r["value"], "ids": list(r["ids"])} for r in results]

    async def list_edges(self) -> list[dict]:
        """List every relationship."""
        query = """
        MATCH (a)-[r]->(b)
        RETURN labels(a)[0] AS sourceType, a.id AS sourceId, type(r) AS type,
               properties(r) AS properties, labels(b)[0] AS targetType, b.id AS targetId
        """
        return await self.execute(query)

    async def get_statistics(self) -> dict:
        """Get overall graph statistics."""
        node_rows = await self.execute(
            "MATCH (n) RETURN labels(n)[0] AS type, count(*) AS count"
        )
        edge_rows = await self.execute(
            "MATCH ()-[r]->() RETURN type(r) AS type, count(*) AS count"
        )
        return {
            "nodes": {r["type"]: r["count"] for r in node_rows},
            "edges": {r["type"]: r["count"] for r in edge_rows},
        }

    async def clear(self) -> None:
        """Delete every node and relationship."""
        await self.execute_write("MATCH (n) DETACH DELETE n")


class NetworkXBackend(GraphBackend):
    """
    In-memory NetworkX backend for development/testing.

    Nodes are keyed by (label, id) so users and transactions never collide.
    Edges are keyed by kind and canonical properties, which makes merges
    idempotent.
    """

    def __init__(self):
        self.graph = nx.MultiDiGraph()
        self._nodes: dict[tuple[str, str], dict] = {}

    async def connect(self) -> None:
        """Initialize the graph."""
        logger.info("Initialized NetworkX in-memory graph")

    async def close(self) -> None:
        """Clear the graph."""
        self.graph.clear()
        self._nodes.clear()

    async def setup_schema(self) -> None:
        """Ids are unique by construction of the node keys."""
        pass

    async def upsert_node(self, label: str, node_id: str, properties: dict) -> dict:
        key = (_check_label(label), node_id)
        existing = self._nodes.get(key)
        if existing is None:
            self._nodes[key] = copy.deepcopy(properties)
            self.graph.add_node(key)
        else:
            existing.update(
                {k: copy.deepcopy(v) for k, v in properties.items() if k != "createdAt"}
            )
        return copy.deepcopy(self._nodes[key])

    async def get_node(self, label: str, node_id: str) -> Optional[dict]:
        node = self._nodes.get((label, node_id))
        return copy.deepcopy(node) if node is not None else None

    async def delete_node(self, label: str, node_id: str) -> bool:
        key = (label, node_id)
        if key not in self._nodes:
            return False
        del self._nodes[key]
        self.graph.remove_node(key)
        return True

    def _labelled(self, label: str):
        for (node_label, _), props in self._nodes.items():
            if node_label == label:
                yield props

    async def list_nodes(
        self,
        label: str,
        filters: Optional[list[PropertyFilter]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
    ) -> list[dict]:
        nodes = [
            props for props in self._labelled(_check_label(label))
            if all(f.matches(props) for f in filters or [])
        ]
        if order_by:
            present = [n for n in nodes if n.get(order_by) is not None]
            missing = [n for n in nodes if n.get(order_by) is None]
            present.sort(key=lambda n: n[order_by], reverse=descending)
            nodes = present + missing
        return copy.deepcopy(nodes)

    async def find_matching_nodes(
        self,
        label: str,
        key: str,
        value: Any,
        exclude_id: Optional[str] = None,
        contains: bool = False,
    ) -> list[dict]:
        matches = []
        for props in self._labelled(_check_label(label)):
            if exclude_id is not None and props.get("id") == exclude_id:
                continue
            stored = props.get(key)
            if contains:
                found = isinstance(stored, list) and value in stored
            else:
                found = stored is not None and stored == value
            if found:
                matches.append(copy.deepcopy(props))
        return matches

    async def merge_edge(self, edge: Edge) -> bool:
        source = (edge.from_label, edge.from_id)
        target = (edge.to_label, edge.to_id)
        if source not in self._nodes or target not in self._nodes:
            return False

        props = edge.properties()
        key = f"{edge.kind.value}:{canonical_json(props)}"
        self.graph.add_edge(source, target, key=key, kind=edge.kind.value, props=props)
        return True

    async def get_neighbors(
        self,
        label: str,
        node_id: str,
        edge_types: Optional[list[str]] = None,
        direction: str = "both",
        neighbor_label: Optional[str] = None,
    ) -> list[dict]:
        key = (label, node_id)
        if key not in self._nodes:
            return []

        edges = []
        if direction in ("out", "both"):
            edges.extend(
                (target, data, "out") for _, target, data in self.graph.out_edges(key, data=True)
            )
        if direction in ("in", "both"):
            edges.extend(
                (source, data, "in") for source, _, data in self.graph.in_edges(key, data=True)
            )

        neighbors = []
        for other, data, edge_direction in edges:
            if edge_types is not None and data["kind"] not in edge_types:
                continue
            if neighbor_label is not None and other[0] != neighbor_label:
                continue
            neighbors.append({
                "m": copy.deepcopy(self._nodes[other]),
                "m_label": other[0],
                "edge_type": data["kind"],
                "edge": copy.deepcopy(data["props"]),
                "direction": edge_direction,
            })
        return neighbors

    async def shortest_path(
        self,
        from_label: str,
        from_id: str,
        to_label: str,
        to_id: str,
        max_depth: int,
    ) -> Optional[list[dict]]:
        source = (from_label, from_id)
        target = (to_label, to_id)
        if source not in self._nodes or target not in self._nodes:
            return None

        # Breadth-first search bounded by max_depth, direction ignored
        undirected = self.graph.to_undirected(as_view=True)
        paths = nx.single_source_shortest_path(undirected, source, cutoff=max_depth)
        nodes = paths.get(target)
        if nodes is None:
            return None

        steps = []
        for u, v in zip(nodes, nodes[1:]):
            kind, props = self._first_edge_between(u, v)
            steps.append({
                "from": self._node_view(u),
                "relationship": {"type": kind, "properties": props},
                "to": self._node_view(v),
            })
        return steps

    def _first_edge_between(self, u, v) -> tuple[str, dict]:
        data = self.graph.get_edge_data(u, v) or self.graph.get_edge_data(v, u)
        first = next(iter(data.values()))
        return first["kind"], copy.deepcopy(first["props"])

    def _node_view(self, key: tuple[str, str]) -> dict:
        return {
            "id": key[1],
            "type": key[0],
            "properties": copy.deepcopy(self._nodes[key]),
        }

    async def group_by_property(self, label: str, key: str, min_size: int) -> list[dict]:
        groups: dict[Any, list[str]] = {}
        for props in self._labelled(_check_label(label)):
            value = props.get(key)
            if value is None:
                continue
            groups.setdefault(value, []).append(props["id"])

        clusters = [
            {"value": value, "ids": ids}
            for value, ids in groups.items()
            if len(ids) >= min_size
        ]
        clusters.sort(key=lambda c: len(c["ids"]), reverse=True)
        return clusters

    async def list_edges(self) -> list[dict]:
        return [
            {
                "sourceType": source[0],
                "sourceId": source[1],
                "type": data["kind"],
                "properties": copy.deepcopy(data["props"]),
                "targetType": target[0],
                "targetId": target[1],
            }
            for source, target, data in self.graph.edges(data=True)
        ]

    async def get_statistics(self) -> dict:
        nodes: dict[str, int] = {}
        for label, _ in self._nodes:
            nodes[label] = nodes.get(label, 0) + 1
        edges: dict[str, int] = {}
        for _, _, kind in self.graph.edges(data="kind"):
            edges[kind] = edges.get(kind, 0) + 1
        return {"nodes": nodes, "edges": edges}

    async def clear(self) -> None:
        self.graph.clear()
        self._nodes.clear()


class GraphClient:
    """
    High-level graph client for FraudGraph.

    Provides a unified interface regardless of backend.
    """

    def __init__(self, backend: Optional[GraphBackend] = None):
        """
        Initialize the graph client.

        Args:
            backend: Graph backend to use. Defaults to NetworkX for development.
        """
        self.backend = backend or NetworkXBackend()
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        """Connect to the graph database."""
        await self.backend.connect()
        self._connected = True

    async def connect_with_retry(self, max_attempts: int = 5, backoff_base: float = 1.0) -> None:
        """
        Connect and install the schema, retrying with exponential backoff.

        Raises:
            SchemaSetupError: if every attempt failed
        """
        last_error: Optional[Exception] = None
        for attempt in range(max_attempts):
            try:
                await self.connect()
                return
            except UpstreamStoreError as e:
                last_error = e
                await self.backend.close()
                if attempt < max_attempts - 1:
                    delay = backoff_base * (2 ** attempt)
                    logger.warning(
                        f"Graph store not ready (attempt {attempt + 1}/{max_attempts}), "
                        f"retrying in {delay:.1f}s: {e}"
                    )
                    await asyncio.sleep(delay)

        logger.error(f"Schema setup failed after {max_attempts} attempts")
        raise SchemaSetupError(
            f"Schema setup failed after {max_attempts} attempts",
            detail=str(last_error) if last_error else None,
        )

    async def close(self) -> None:
        """Close the connection."""
        await self.backend.close()
        self._connected = False

    async def __aenter__(self) -> "GraphClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # Node operations

    async def upsert_node(self, label: str, node_id: str, properties: dict) -> dict:
        return await self.backend.upsert_node(label, node_id, properties)

    async def get_node(self, label: str, node_id: str) -> Optional[dict]:
        return await self.backend.get_node(label, node_id)

    async def get_user(self, user_id: str) -> Optional[dict]:
        """Get a user by ID."""
        return await self.backend.get_node(USER, user_id)

    async def get_transaction(self, transaction_id: str) -> Optional[dict]:
        """Get a transaction by ID."""
        return await self.backend.get_node(TRANSACTION, transaction_id)

    async def delete_node(self, label: str, node_id: str) -> bool:
        return await self.backend.delete_node(label, node_id)

    async def list_nodes(
        self,
        label: str,
        filters: Optional[list[PropertyFilter]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
    ) -> list[dict]:
        return await self.backend.list_nodes(label, filters, order_by, descending)

    async def find_matching_nodes(
        self,
        label: str,
        key: str,
        value: Any,
        exclude_id: Optional[str] = None,
        contains: bool = False,
    ) -> list[dict]:
        return await self.backend.find_matching_nodes(label, key, value, exclude_id, contains)

    # Edge operations

    async def merge_edge(self, edge: Edge) -> bool:
        return await self.backend.merge_edge(edge)

    async def get_neighbors(
        self,
        label: str,
        node_id: str,
        edge_types: Optional[list[str]] = None,
        direction: str = "both",
        neighbor_label: Optional[str] = None,
    ) -> list[dict]:
        """Get neighbors one hop away, optionally filtered by edge type and label."""
        if direction not in DIRECTIONS:
            raise ValueError(f"Invalid direction: {direction}")
        return await self.backend.get_neighbors(
            label, node_id, edge_types, direction, neighbor_label
        )

    async def list_edges(self) -> list[dict]:
        return await self.backend.list_edges()

    # Analytics

    async def shortest_path(
        self,
        from_label: str,
        from_id: str,
        to_label: str,
        to_id: str,
        max_depth: int,
    ) -> Optional[list[dict]]:
        return await self.backend.shortest_path(from_label, from_id, to_label, to_id, max_depth)

    async def group_by_property(self, label: str, key: str, min_size: int) -> list[dict]:
        return await self.backend.group_by_property(label, key, min_size)

    # Statistics

    async def get_statistics(self) -> dict:
        """Get graph statistics."""
        return await self.backend.get_statistics()

    async def clear(self) -> None:
        await self.backend.clear()


# Factory function

def create_graph_client(
    backend_type: str = "networkx",
    **kwargs
) -> GraphClient:
    """
    Create a graph client with the specified backend.

    Args:
        backend_type: One of "networkx", "neo4j"
        **kwargs: Backend-specific configuration

    Returns:
        Configured GraphClient instance

    Examples:
        # NetworkX (default, for development/testing)
        client = create_graph_client("networkx")

        # Neo4j
        client = create_graph_client("neo4j",
            uri="neo4j://localhost:7687",
            user="neo4j",
            password="password"
        )
    """
    if backend_type == "networkx":
        backend = NetworkXBackend()
    elif backend_type == "neo4j":
        backend = Neo4jBackend(
            uri=kwargs.get("uri", "neo4j://localhost:7687"),
            user=kwargs.get("user", "neo4j"),
            password=kwargs.get("password", ""),
            database=kwargs.get("database", "neo4j"),
            max_connection_pool_size=kwargs.get("max_connection_pool_size", 50),
            connection_timeout=kwargs.get("connection_timeout", 30.0),
        )
    else:
        raise ValueError(f"Unknown backend type: {backend_type}. Supported: networkx, neo4j")

    return GraphClient(backend)
