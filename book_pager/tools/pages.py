"""
Pages tool: chapter pages kept in a page store. Service functions plus the
`pages` CLI subapp.

When a chapter has no stored pages, its full text is the source: pages are
generated on the fly (ids temp-<n>) and reported as from_content. Every save
rewrites the chapter text from the pages, so the two never drift apart.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import typer

from book_pager import config as config_module
from book_pager.formats import UnknownPaperFormatError, get_format, word_threshold_for
from book_pager.models import Page, PaperFormat
from book_pager.redistribute import (
    PageNotFoundError,
    compact_pages,
    merge_pages_to_chapter,
    redistribute_pages,
)
from book_pager.splitter import split_chapter_to_pages
from book_pager.store import TEMP_ID_PREFIX, ChapterNotFoundError, JsonPageStore, PageStore, StoreError
from book_pager.text import effective_length

log = logging.getLogger(__name__)


def load_pages(
    store: PageStore,
    chapter_id: str,
    *,
    paper_format: PaperFormat | str | None = None,
    chars_per_page: Optional[int] = None,
) -> Tuple[List[Page], bool]:
    """Return (pages, from_content). Raises ChapterNotFoundError."""
    pages = store.get_pages(chapter_id)
    if pages:
        return pages, False
    options = {"paper_format": paper_format, "chapter_id": chapter_id}
    if chars_per_page is not None:
        options["chars_per_page"] = chars_per_page
    generated = split_chapter_to_pages(store.get_chapter_content(chapter_id), **options)
    return [p.model_copy(update={"id": f"{TEMP_ID_PREFIX}{i}"}) for i, p in enumerate(generated)], True


def save_pages(
    store: PageStore,
    chapter_id: str,
    pages: Sequence[Page],
    *,
    paper_format: PaperFormat | str | None = None,
) -> List[Page]:
    """Store pages (metrics recomputed from content) and sync the chapter text. Raises ChapterNotFoundError."""
    threshold = word_threshold_for(paper_format)
    fresh = [p.with_content(p.content, word_threshold=threshold) for p in pages]
    stored = store.replace_pages(chapter_id, fresh)
    store.set_chapter_content(chapter_id, merge_pages_to_chapter(stored))
    return stored


def edit_page(
    store: PageStore,
    chapter_id: str,
    page_number: int,
    content: str,
    paper_format: PaperFormat | str,
) -> List[Page]:
    """Replace one page's content, redistributing overflow, and save. Raises PageNotFoundError."""
    pages, _ = load_pages(store, chapter_id, paper_format=paper_format)
    updated = redistribute_pages(pages, page_number, content, paper_format, chapter_id)
    log.info("Edited page %d of %s: %d -> %d pages", page_number, chapter_id, len(pages), len(updated))
    return save_pages(store, chapter_id, updated, paper_format=paper_format)


def compact_chapter(store: PageStore, chapter_id: str, paper_format: PaperFormat | str) -> List[Page]:
    """Compact a chapter's pages and save."""
    pages, _ = load_pages(store, chapter_id, paper_format=paper_format)
    return save_pages(store, chapter_id, compact_pages(pages, paper_format, chapter_id), paper_format=paper_format)


def import_chapter(
    store: PageStore,
    chapter_id: str,
    content: str,
    *,
    paper_format: PaperFormat | str | None = None,
    chars_per_page: Optional[int] = None,
) -> List[Page]:
    """Set a chapter's text and store its cold-start pages."""
    store.set_chapter_content(chapter_id, content)
    store.replace_pages(chapter_id, [])
    pages, _ = load_pages(store, chapter_id, paper_format=paper_format, chars_per_page=chars_per_page)
    return save_pages(store, chapter_id, pages, paper_format=paper_format)


# ---------------------------------------------------------------------------
# CLI subapp
# ---------------------------------------------------------------------------

pages_app = typer.Typer(help="Chapter pages in the page store (import, show, edit, compact, export).")


def _store(store_path: Optional[Path]) -> JsonPageStore:
    return JsonPageStore(store_path or config_module.get_store_path())


def resolve_format(name: Optional[str]) -> PaperFormat:
    """Paper format from a CLI option, or the configured default. Exits 1 on an unknown name."""
    try:
        return get_format(name).name if name else config_module.get_paper_format()
    except UnknownPaperFormatError as e:
        typer.echo(f"Error: {e.args[0]}", err=True)
        raise typer.Exit(1)


def _echo_pages(pages: Sequence[Page], paper_format: PaperFormat) -> None:
    limit = get_format(paper_format).char_limit
    for p in pages:
        chars = effective_length(p.content)
        flag = "  OVER" if chars > limit else ""
        typer.echo(f"  p.{p.page_number:<4} {p.status.value:<8} {p.word_count:>5} words {chars:>6}/{limit} chars{flag}")


StoreOption = typer.Option(None, "--store", "-s", help="Page store JSON (default: from config)", path_type=Path)
FormatOption = typer.Option(None, "--format", "-f", help="Paper format (default: from config)")


@pages_app.command("import")
def _import(
    chapter_id: str = typer.Argument(..., help="Chapter id"),
    file: Path = typer.Argument(..., help="Text file with the chapter's full text", path_type=Path),
    fmt: Optional[str] = FormatOption,
    store_path: Optional[Path] = StoreOption,
) -> None:
    """Import a chapter's text and store its pages."""
    if not file.is_file():
        typer.echo(f"Error: file not found: {file}", err=True)
        raise typer.Exit(1)
    paper_format = resolve_format(fmt)
    try:
        pages = import_chapter(
            _store(store_path),
            chapter_id,
            file.read_text(encoding="utf-8"),
            paper_format=paper_format,
            chars_per_page=config_module.get_chars_per_page(),
        )
    except StoreError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Imported chapter '{chapter_id}': {len(pages)} pages")
    _echo_pages(pages, paper_format)


@pages_app.command("show")
def _show(
    chapter_id: str = typer.Argument(..., help="Chapter id"),
    fmt: Optional[str] = FormatOption,
    store_path: Optional[Path] = StoreOption,
    as_json: bool = typer.Option(False, "--json", help="Print pages as JSON"),
) -> None:
    """Show a chapter's pages."""
    paper_format = resolve_format(fmt)
    try:
        pages, from_content = load_pages(_store(store_path), chapter_id, paper_format=paper_format)
    except (ChapterNotFoundError, StoreError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    if as_json:
        typer.echo(json.dumps(
            {"pages": [p.model_dump(mode="json") for p in pages], "from_content": from_content},
            indent=2,
            ensure_ascii=False,
        ))
        return
    source = " (generated from chapter text)" if from_content else ""
    typer.echo(f"Chapter '{chapter_id}': {len(pages)} pages{source}")
    _echo_pages(pages, paper_format)


@pages_app.command("edit")
def _edit(
    chapter_id: str = typer.Argument(..., help="Chapter id"),
    page_number: int = typer.Argument(..., help="Page number to replace"),
    file: Path = typer.Argument(..., help="Text file with the new page content", path_type=Path),
    fmt: Optional[str] = FormatOption,
    store_path: Optional[Path] = StoreOption,
) -> None:
    """Replace one page's content; overflow is moved to new pages."""
    if not file.is_file():
        typer.echo(f"Error: file not found: {file}", err=True)
        raise typer.Exit(1)
    paper_format = resolve_format(fmt)
    try:
        pages = edit_page(_store(store_path), chapter_id, page_number, file.read_text(encoding="utf-8"), paper_format)
    except (ChapterNotFoundError, PageNotFoundError, StoreError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Chapter '{chapter_id}': {len(pages)} pages")
    _echo_pages(pages, paper_format)


@pages_app.command("compact")
def _compact(
    chapter_id: str = typer.Argument(..., help="Chapter id"),
    fmt: Optional[str] = FormatOption,
    store_path: Optional[Path] = StoreOption,
) -> None:
    """Merge under-full pages and drop empty ones."""
    paper_format = resolve_format(fmt)
    try:
        pages = compact_chapter(_store(store_path), chapter_id, paper_format)
    except (ChapterNotFoundError, StoreError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Chapter '{chapter_id}': {len(pages)} pages after compaction")
    _echo_pages(pages, paper_format)


@pages_app.command("export")
def _export(
    chapter_id: str = typer.Argument(..., help="Chapter id"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to file instead of stdout", path_type=Path),
    store_path: Optional[Path] = StoreOption,
) -> None:
    """Print the chapter text merged from its pages."""
    try:
        pages, _ = load_pages(_store(store_path), chapter_id)
    except (ChapterNotFoundError, StoreError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    text = merge_pages_to_chapter(pages)
    if output:
        output.write_text(text, encoding="utf-8")
        typer.echo(f"Wrote {output}")
    else:
        typer.echo(text)
