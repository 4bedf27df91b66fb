"""Markdown-to-HTML rendering with Pygments-highlighted code fences.

Highlighter settings travel as an explicit ``HighlightConfig`` value so one
process can render documents with different styles side by side.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from html import escape

from markdown_it import MarkdownIt
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ..errors import InputError

logger = logging.getLogger(__name__)

STYLESHEET_SCOPE = "pre code"


@dataclass(frozen=True)
class HighlightConfig:
    """Pygments style name and whether to inline colors into each span."""

    style: str = "default"
    inline_styles: bool = True


def _build_formatter(config: HighlightConfig) -> HtmlFormatter:
    try:
        return HtmlFormatter(style=config.style, noclasses=config.inline_styles, nowrap=True)
    except ClassNotFound as exc:
        raise InputError(f"unknown highlight style: {config.style!r}") from exc


def _code_highlighter(formatter: HtmlFormatter) -> Callable[[str, str, str], str]:
    """Return a markdown-it ``highlight`` hook; ``""`` means plain escaping."""

    def highlight_code(code: str, lang: str, _attrs: str) -> str:
        if not lang:
            return ""
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            return ""
        try:
            return highlight(code, lexer, formatter)
        except Exception as exc:
            logger.warning("highlighting failed for language %s: %s", lang, exc)
            return ""

    return highlight_code


def render_html(markdown: str, config: HighlightConfig | None = None) -> str:
    """Render ``markdown`` to an HTML fragment, highlighting fenced code."""
    active = config or HighlightConfig()
    formatter = _build_formatter(active)
    md = MarkdownIt("commonmark", {"html": False, "highlight": _code_highlighter(formatter)}).enable("table")
    return md.render(markdown)


def stylesheet(config: HighlightConfig | None = None) -> str:
    """CSS for class-based highlighting; empty when styles are inlined."""
    active = config or HighlightConfig()
    if active.inline_styles:
        return ""
    return _build_formatter(active).get_style_defs(STYLESHEET_SCOPE)


def render_html_page(markdown: str, title: str, config: HighlightConfig | None = None) -> str:
    """Wrap ``render_html`` output in a standalone HTML page."""
    css = stylesheet(config)
    style_block = f"<style>\n{css}\n</style>\n" if css else ""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n<meta charset=\"utf-8\">\n"
        f"<title>{escape(title)}</title>\n"
        f"{style_block}"
        "</head>\n<body>\n"
        f"{render_html(markdown, config)}"
        "</body>\n</html>\n"
    )


__all__ = [
    "HighlightConfig",
    "render_html",
    "render_html_page",
    "stylesheet",
]
