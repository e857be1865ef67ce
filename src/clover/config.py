"""Resolver configuration.

ViewConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Checked in this order at every resolution step; earlier entries win.
DEFAULT_EXTENSIONS: tuple[str, ...] = (".html", ".py", ".kida", ".jinja")

DEFAULT_FALLBACK_PATH = "/index"
DEFAULT_CACHE_CONTROL = "public, max-age=86400"


@dataclass(frozen=True, slots=True)
class ViewConfig:
    """Resolver and server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ViewConfig(view_dir="views", asset_dir="public", fallback=False)
        resolver = Resolver.from_config(config)
    """

    # Views
    view_dir: str | Path = "views"
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    global_data: Mapping[str, Any] = field(default_factory=dict)

    # Static files (None disables static serving)
    asset_dir: str | Path | None = None
    cache_control: str = DEFAULT_CACHE_CONTROL

    # Fallback view for unmatched requests
    fallback: bool = True
    fallback_path: str = DEFAULT_FALLBACK_PATH

    # Include exception text in 500 responses
    debug: bool = False
