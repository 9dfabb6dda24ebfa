"""
CLI entry point: paginate chapter files from the shell.

    book-pager split chapter.txt --format a5      # cold-start pages
    book-pager overflow page.txt --format novel   # fragments of one overflowing page
    book-pager check page.txt --format a4         # overflow report
    book-pager stats chapter.txt                  # length, words, status
    book-pager formats                            # capacity table
    book-pager pages import ch1 chapter.txt       # store pages (see `pages --help`)
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from book_pager import config as config_module
from book_pager.api import paginate_file
from book_pager.formats import FORMATS, classify_status, get_format
from book_pager.splitter import check_page_overflow, split_overflow_fragments
from book_pager.text import count_words, effective_length
from book_pager.tools.config import config_app
from book_pager.tools.pages import pages_app, resolve_format

app = typer.Typer(
    name="book-pager",
    help="Split chapter text into pages sized for a paper format.",
)
app.add_typer(pages_app, name="pages")
app.add_typer(config_app, name="config")


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Print diagnostic info"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _require_file(file: Path) -> None:
    if not file.is_file():
        typer.echo(f"Error: file not found: {file}", err=True)
        raise typer.Exit(1)


def _read(file: Path) -> str:
    _require_file(file)
    return file.read_text(encoding="utf-8")


@app.command("split")
def split_cmd(
    file: Path = typer.Argument(..., help="Text file with the chapter's full text", path_type=Path),
    start: int = typer.Option(1, "--start", help="Number of the first page", min=1),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Paper format (default: from config)"),
    budget: Optional[int] = typer.Option(
        None, "--budget", "-b", help="Characters packed per page (default: from config)", min=1
    ),
    as_json: bool = typer.Option(False, "--json", help="Print pages as JSON"),
) -> None:
    """Split a chapter into pages (manual ---pagebreak--- markers win)."""
    _require_file(file)
    paper_format = resolve_format(fmt)
    result = paginate_file(
        file,
        paper_format=paper_format,
        start_page=start,
        chars_per_page=budget or config_module.get_chars_per_page(),
    )
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    typer.echo(result.message)
    limit = get_format(paper_format).char_limit
    for p in result.pages:
        flag = "  OVER" if p.page_number in result.overflow_pages else ""
        typer.echo(
            f"  p.{p.page_number:<4} {p.status.value:<8} {p.word_count:>5} words "
            f"{effective_length(p.content):>6}/{limit} chars{flag}"
        )
    typer.echo(f"  total   {result.total_words} words")


@app.command("overflow")
def overflow_cmd(
    file: Path = typer.Argument(..., help="Text file with one page's content", path_type=Path),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Paper format (default: from config)"),
    as_json: bool = typer.Option(False, "--json", help="Print fragments as JSON"),
) -> None:
    """Split one page's content into fragments that fit the paper format."""
    content = _read(file)
    spec = get_format(resolve_format(fmt))
    fragments = split_overflow_fragments(content, spec.char_limit)
    if as_json:
        typer.echo(json.dumps([f.model_dump() for f in fragments], indent=2, ensure_ascii=False))
        return
    typer.echo(f"{len(fragments)} fragment(s) at {spec.char_limit} chars ({spec.name.value})")
    for i, frag in enumerate(fragments, start=1):
        note = "  (hard cut)" if frag.forced else ""
        typer.echo(f"--- fragment {i}: {effective_length(frag.content)} chars{note}")
        typer.echo(frag.content)


@app.command("check")
def check_cmd(
    file: Path = typer.Argument(..., help="Text file with one page's content", path_type=Path),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Paper format (default: from config)"),
) -> None:
    """Check whether content fits one page. Exits 1 on overflow."""
    report = check_page_overflow(_read(file), resolve_format(fmt))
    typer.echo(f"{report.char_count}/{report.max_chars} chars")
    if report.is_overflow:
        typer.echo(f"Overflow by {report.overflow_amount} chars", err=True)
        raise typer.Exit(1)


@app.command("stats")
def stats_cmd(
    file: Path = typer.Argument(..., help="Text file", path_type=Path),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Paper format for the status threshold"),
) -> None:
    """Effective length, word count and page status of a text."""
    content = _read(file)
    spec = get_format(resolve_format(fmt))
    words = count_words(content)
    typer.echo(f"Characters: {effective_length(content)}")
    typer.echo(f"Words:      {words}")
    typer.echo(f"Status:     {classify_status(words, spec.word_threshold).value} ({spec.name.value})")


@app.command("formats")
def formats_cmd() -> None:
    """List paper formats with their page capacity."""
    for spec in FORMATS.values():
        typer.echo(f"{spec.name.value:<8} {spec.label:<18} {spec.char_limit:>5} chars  {spec.word_threshold:>4} words")


def main() -> None:
    """Entry point for the book-pager console script."""
    app()


if __name__ == "__main__":
    main()
