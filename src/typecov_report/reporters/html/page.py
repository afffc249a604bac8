"""Page renderer — wraps page content into a standalone HTML document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import format_datetime
from enum import Enum
from functools import lru_cache
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined

from typecov_report.reporters.html.assets import BASELINE_STYLESHEET, include_asset

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "TypeScript coverage report"


class PageTemplate(Enum):
    """Page templates available to the renderer."""

    SUMMARY = "summary.html.j2"
    DETAIL = "detail.html.j2"


@dataclass(frozen=True)
class RenderOptions:
    """Per-page rendering options."""

    title: str | None = None
    """Document title. Falls back to ``DEFAULT_TITLE``."""

    extra_assets_markup: str = ""
    """Already-rendered asset tags appended to ``<head>``."""


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("typecov_report.reporters.html", "templates"),
        autoescape=True,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def format_timestamp(moment: datetime) -> str:
    """Format ``moment`` as an RFC 1123 UTC string (``Sun, 18 Oct 2026 12:00:00 GMT``)."""
    return format_datetime(moment.astimezone(UTC), usegmt=True)


def render_page(
    template: PageTemplate,
    payload: Any,
    *,
    generated_at: datetime,
    options: RenderOptions | None = None,
) -> str:
    """Render a full HTML document for ``payload``.

    Args:
        template: Which page template to render.
        payload: The page data (``SummaryPayload`` or ``DetailPayload``).
        generated_at: Timestamp printed in the footer.
        options: Title and extra asset markup.

    Returns:
        The complete HTML document. Identical inputs give identical output.
    """
    if options is None:
        options = RenderOptions()

    env = _environment()
    logger.debug("Rendering %s", template.value)
    return env.get_template(template.value).render(
        page=payload,
        title=options.title or DEFAULT_TITLE,
        baseline_stylesheet=include_asset(BASELINE_STYLESHEET),
        extra_assets=options.extra_assets_markup,
        generated_at=format_timestamp(generated_at),
    )
