"""Repository document assembly and rendering."""

from __future__ import annotations

from .assemble import DocumentAssembler, FetchContent, FileSection, assemble_document
from .html_render import HighlightConfig, render_html, render_html_page, stylesheet
from .languages import fence_language, file_type
from .sections import (
    FETCH_FAILED_PLACEHOLDER,
    code_fence,
    format_contributors,
    format_failed_section,
    format_file_section,
    format_repository_details,
)

__all__ = [
    "DocumentAssembler",
    "FetchContent",
    "FileSection",
    "assemble_document",
    "HighlightConfig",
    "render_html",
    "render_html_page",
    "stylesheet",
    "file_type",
    "fence_language",
    "FETCH_FAILED_PLACEHOLDER",
    "code_fence",
    "format_contributors",
    "format_failed_section",
    "format_file_section",
    "format_repository_details",
]
