"""Mapping from coverage file keys to locations inside the report tree."""

from __future__ import annotations

from pathlib import PurePath, PurePosixPath
from urllib.parse import quote

from typecov_report.errors import ConfigurationError

FILES_DIR = "files"
ASSETS_DIR = "assets"
INDEX_FILE = "index.html"

_PARENT_PLACEHOLDER = "__"


def mirrored_parts(file_path: str) -> tuple[str, ...]:
    """Split a file key into the components mirrored under ``files/``.

    Root and drive anchors are dropped, ``.`` components are skipped and ``..``
    components become ``__`` so the result never leaves the report tree.

    Raises:
        ConfigurationError: If nothing is left to name the page.
    """
    path = PurePath(file_path)
    parts: list[str] = []
    for part in path.parts:
        if part == path.anchor or part == ".":
            continue
        parts.append(_PARENT_PLACEHOLDER if part == ".." else part)

    if not parts:
        raise ConfigurationError(f"Cannot map file path {file_path!r} into the report tree")
    return tuple(parts)


def detail_page_path(file_path: str) -> PurePosixPath:
    """Return the detail page location relative to the output root."""
    parts = mirrored_parts(file_path)
    return PurePosixPath(FILES_DIR, *parts[:-1], f"{parts[-1]}.html")


def detail_page_href(file_path: str) -> str:
    """Return the URL of the detail page relative to the output root.

    Unlike ``detail_page_path`` the result is percent-encoded, so keys holding
    ``#``, ``?`` or ``%`` still link to their page.
    """
    return quote(str(detail_page_path(file_path)))


def root_prefix(file_path: str) -> str:
    """Return the relative URL prefix leading from a detail page back to the output root."""
    return "../" * len(mirrored_parts(file_path))


def assets_folder(file_path: str) -> str:
    """Return the relative URL from a detail page to the shared ``assets`` folder."""
    return root_prefix(file_path) + ASSETS_DIR
