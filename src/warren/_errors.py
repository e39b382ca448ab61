"""Warren error hierarchy.

All warren-specific errors inherit from WarrenError for easy catching.
"""


class WarrenError(Exception):
    """Base error for all warren operations."""


class ConfigError(WarrenError):
    """Invalid or missing configuration."""


class ExtractionError(WarrenError):
    """A per-page config source could not be read or decoded.

    Carried as the reason of a ``Failed`` extraction result.  The route
    generator records it and treats the source as empty.
    """


class RouteError(WarrenError):
    """Route tree assembly failed for the whole pass."""


class ExportError(WarrenError):
    """Error while writing the route manifest."""
