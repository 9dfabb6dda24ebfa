"""Single-job tools: one module per tool (pages, config)."""

from book_pager.tools.config import config_app
from book_pager.tools.pages import (
    compact_chapter,
    edit_page,
    import_chapter,
    load_pages,
    pages_app,
    resolve_format,
    save_pages,
)

__all__ = [
    "config_app",
    "pages_app",
    "load_pages",
    "save_pages",
    "edit_page",
    "compact_chapter",
    "import_chapter",
    "resolve_format",
]
