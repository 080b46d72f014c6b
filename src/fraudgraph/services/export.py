"""
Graph export.

Exports the full graph (users, transactions, relationships) as JSON or as
one CSV table per entity kind, optionally saved to timestamped files.
"""

import csv
import io
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from fraudgraph.errors import ValidationError
from fraudgraph.graph.client import GraphClient
from fraudgraph.graph.schema import TRANSACTION, USER, decode_properties

logger = logging.getLogger(__name__)

TABLES = ("users", "transactions", "relationships")


class ExportFormat(str, Enum):
    """Supported export formats."""

    JSON = "json"
    CSV = "csv"


@dataclass
class ExportResult:
    """Result of a graph export."""

    format: ExportFormat
    data: dict[str, Any]
    metadata: dict[str, Any]
    exported_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {"format": self.format.value, "data": self.data, "metadata": self.metadata}


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def rows_to_csv(rows: list[dict]) -> str:
    """
    Render records as CSV.

    The header is the union of keys in first-seen order; nested values are
    JSON-encoded.
    """
    if not rows:
        return ""
    headers = list(dict.fromkeys(key for row in rows for key in row))

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_cell(row.get(h)) for h in headers])
    return output.getvalue()


class ExportService:
    """Builds graph exports."""

    def __init__(self, graph: GraphClient):
        self.graph = graph

    async def collect(self) -> dict:
        """Fetch every node and edge with export metadata."""
        users = [decode_properties(n) for n in await self.graph.list_nodes(USER)]
        transactions = [decode_properties(n) for n in await self.graph.list_nodes(TRANSACTION)]
        relationships = await self.graph.list_edges()

        return {
            "users": users,
            "transactions": transactions,
            "relationships": relationships,
            "metadata": {
                "userCount": len(users),
                "transactionCount": len(transactions),
                "relationshipCount": len(relationships),
                "exportDate": datetime.now(timezone.utc).isoformat(),
            },
        }

    async def export_graph(self, format: Any = ExportFormat.JSON) -> ExportResult:
        """
        Export the whole graph.

        Args:
            format: "json" keeps records as objects, "csv" renders each table as text

        Raises:
            ValidationError: if the format is not supported
        """
        try:
            format = ExportFormat(format)
        except ValueError as e:
            raise ValidationError(
                f"Unsupported export format: {format}. Use json or csv", field="format"
            ) from e

        export = await self.collect()
        metadata = export.pop("metadata")

        if format == ExportFormat.JSON:
            data = export
        else:
            data = {table: rows_to_csv(export[table]) for table in TABLES}

        logger.info(
            f"Exported graph as {format.value}: {metadata['userCount']} users, "
            f"{metadata['transactionCount']} transactions, "
            f"{metadata['relationshipCount']} relationships"
        )
        return ExportResult(format=format, data=data, metadata=metadata)

    @staticmethod
    def save_export(result: ExportResult, directory: Path) -> list[Path]:
        """
        Write an export to timestamped files in directory.

        JSON produces a single graph_export_<ts>.json; CSV produces one
        <table>_<ts>.csv per table.
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        stamp = result.exported_at.strftime("%Y%m%dT%H%M%S%fZ")

        paths = []
        if result.format == ExportFormat.JSON:
            path = directory / f"graph_export_{stamp}.json"
            payload = {**result.data, "metadata": result.metadata}
            path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            paths.append(path)
        else:
            for table in TABLES:
                path = directory / f"{table}_{stamp}.csv"
                path.write_text(result.data[table], encoding="utf-8")
                paths.append(path)

        logger.info(f"Saved {result.format.value} export to {directory}")
        return paths
