"""Warren — route trees from a views directory.

Every page file becomes a route, directories become nesting, and
per-page ``<route>`` blocks and ``route.json`` files are merged into the
route's metadata.

Quick start::

    import warren

    routes = warren.generate("my-app/")

Three commands::

    warren routes my-app/         # Print the route tree
    warren build my-app/          # Write routes.json
    warren watch my-app/          # Rewrite routes.json on change

For explicit inputs (no filesystem), use the async core::

    from warren import generate_routes
    routes = await generate_routes(pages, layouts)

"""

__version__ = "0.1.0-dev"
__all__ = [
    "WarrenConfig",
    "__version__",
    "build",
    "generate",
    "generate_routes",
    "watch",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import warren`` fast.
    """
    if name == "WarrenConfig":
        from warren.config import WarrenConfig

        return WarrenConfig

    if name == "generate":
        from warren.app import generate

        return generate

    if name == "build":
        from warren.app import build

        return build

    if name == "watch":
        from warren.app import watch

        return watch

    if name == "generate_routes":
        from warren.routes.generate import generate_routes

        return generate_routes

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
