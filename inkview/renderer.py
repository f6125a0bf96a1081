"""Markdown file to HTML document rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from markdown_it import MarkdownIt

from .document import assemble, error_document
from .tables import preprocess


class RenderError(Exception):
    """Base class for failures that end in an error page instead of content."""


class ReadError(RenderError):
    """The markdown file is missing, unreadable, or not valid UTF-8."""


class ConversionError(RenderError):
    """The markdown converter rejected the input."""


@dataclass(frozen=True)
class RenderedDocument:
    html: str
    base_path: Path | None = None
    error: str | None = None


def read_markdown(path: Path) -> str:
    """Read `path` as strict UTF-8 text."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise ReadError(f"{path}: {reason}") from exc
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ReadError(f"{path}: not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc


class MarkdownRenderer:
    """Converts markdown files to styled HTML documents with pipe-table support."""

    def __init__(self) -> None:
        # Raw HTML must pass through so preprocessed tables survive conversion.
        self._md = (
            MarkdownIt("commonmark", {"html": True, "typographer": True})
            .enable(["replacements", "smartquotes"])
            .enable("strikethrough")
        )

    def convert(self, markdown_text: str) -> str:
        """Return the HTML body for `markdown_text`."""
        prepared = preprocess(markdown_text)
        try:
            return self._md.render(prepared)
        except Exception as exc:
            raise ConversionError(f"Markdown conversion failed: {exc}") from exc

    def render_markdown(self, markdown_text: str, title: str) -> str:
        return assemble(self.convert(markdown_text), title)

    def render(self, path: Path) -> RenderedDocument:
        """Render `path`, falling back to an error page on any render failure."""
        path = Path(path)
        try:
            markdown_text = read_markdown(path)
            html_doc = self.render_markdown(markdown_text, path.name)
        except RenderError as exc:
            return RenderedDocument(error_document(str(exc)), None, str(exc))
        return RenderedDocument(html_doc, path.resolve().parent)
