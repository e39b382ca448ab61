"""Warren configuration.

WarrenConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class WarrenConfig:
    """Configuration for a route generation pass.

    Attributes:
        root: Project root (contains views/ and layouts/).
              Always resolved to an absolute path on construction.
        views_dir: Directory holding the page files.
        layouts_dir: Directory holding the wrapping layouts.
        page_suffix: Extension of page and layout files.
        route_file: Stem of the sibling declarative file (``route.json``).
        default_redirect: Redirect target of the synthesized root route.
        auth_prefix: Leaf names starting with this prefix default to
            ``requiresAuth = True``.
        admin_segment: Directory name that selects ``admin_layout``.
        admin_layout: Layout used for pages under ``admin_segment``.
        default_layout: Layout used everywhere else.
        strict_layouts: Raise instead of warning when sibling pages
            disagree on their parent's layout.
        output: Route manifest written by ``warren build``.

    """

    root: Path = field(default_factory=Path.cwd)
    views_dir: str = "views"
    layouts_dir: str = "layouts"
    page_suffix: str = ".vue"
    route_file: str = "route"
    default_redirect: str = "/home"
    auth_prefix: str = "Auth"
    admin_segment: str = "admin"
    admin_layout: str = "AdminLayout"
    default_layout: str = "DefaultLayout"
    strict_layouts: bool = False
    output: Path = field(default_factory=lambda: Path("routes.json"))

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not self.page_suffix.startswith("."):
            object.__setattr__(self, "page_suffix", "." + self.page_suffix)

    @property
    def views_path(self) -> Path:
        """Absolute path to the views directory."""
        return self.root / self.views_dir

    @property
    def layouts_path(self) -> Path:
        """Absolute path to the layouts directory."""
        return self.root / self.layouts_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to the route manifest."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
