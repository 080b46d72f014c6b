"""
Export API routes.
"""

from typing import Any

from fastapi import APIRouter, Query
from starlette.concurrency import run_in_threadpool

from fraudgraph.api.deps import ExportServiceDep
from fraudgraph.config import settings

router = APIRouter()


@router.get("/graph")
async def export_graph(
    exporter: ExportServiceDep,
    format: str = Query("json", description="json or csv"),
    download: bool = Query(False, description="Also save the export to files"),
) -> dict[str, Any]:
    """
    Export the full graph.

    With download=true the export is written to timestamped files in the
    configured export directory and the file paths are returned.
    """
    result = await exporter.export_graph(format)

    if download:
        paths = await run_in_threadpool(exporter.save_export, result, settings.export_dir)
        return {
            "success": True,
            "format": result.format.value,
            "files": [str(p) for p in paths],
            "metadata": result.metadata,
        }

    return result.to_dict()
