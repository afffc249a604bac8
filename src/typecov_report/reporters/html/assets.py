"""Asset references — turn asset paths/URLs into the tags that load them."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable
from html import escape
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

BASELINE_STYLESHEET = "https://cdn.jsdelivr.net/npm/semantic-ui@2.4.2/dist/semantic.min.css"
"""Stylesheet included on every page."""

SUMMARY_ASSETS: tuple[str, ...] = ("./assets/source-file.css",)
"""Assets for ``index.html``, relative to the output root."""

CODEMIRROR_ASSETS: tuple[str, ...] = (
    "https://cdnjs.cloudflare.com/ajax/libs/codemirror/5.52.2/codemirror.min.js",
    "https://cdnjs.cloudflare.com/ajax/libs/codemirror/5.52.2/mode/javascript/javascript.min.js",
    "https://cdnjs.cloudflare.com/ajax/libs/codemirror/5.52.2/codemirror.min.css",
)
"""Third-party assets used by detail pages for syntax highlighting."""

LOCAL_ASSET_FILES: tuple[str, ...] = ("source-file.js", "source-file.css")
"""Files expected inside the report's ``assets`` folder."""


def _extension(reference: str) -> str:
    """Return the lower-cased extension of a path or URL, ignoring query/fragment."""
    return posixpath.splitext(urlsplit(reference).path)[1].lower()


def include_asset(reference: str) -> str:
    """Return the markup that loads ``reference``.

    ``.js`` becomes a ``<script>`` tag and ``.css`` a stylesheet ``<link>``.
    Any other extension yields an empty string and a logged warning.
    """
    extension = _extension(reference)
    href = escape(reference, quote=True)

    if extension == ".js":
        return f'<script src="{href}" type="text/javascript" charset="utf-8"></script>'

    if extension == ".css":
        return f'<link href="{href}" type="text/css" rel="stylesheet">'

    logger.warning("include_asset: couldn't recognise the extension %r of %s", extension, reference)
    return ""


def include_assets(references: Iterable[str]) -> str:
    """Return the markup for every reference, one per line, in input order."""
    return "\n".join(include_asset(reference) for reference in references)


def detail_assets(assets_folder: str) -> list[str]:
    """Return the asset references for a detail page.

    Args:
        assets_folder: Relative URL from the detail page to the ``assets`` folder.
    """
    return [
        *CODEMIRROR_ASSETS,
        *(posixpath.join(assets_folder, name) for name in LOCAL_ASSET_FILES),
    ]
