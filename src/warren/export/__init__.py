"""Route tree output — JSON manifest and text outline."""

from warren.export.manifest import ExportResult, routes_to_data, routes_to_json, write_manifest
from warren.export.outline import format_tree

__all__ = [
    "ExportResult",
    "format_tree",
    "routes_to_data",
    "routes_to_json",
    "write_manifest",
]
