"""
Page persistence. The engine only produces Page lists; a store keeps them per
chapter next to the chapter's full text.

PageStore is the interface; JsonPageStore keeps everything in one JSON file:

    {"chapters": {"<chapter_id>": {"content": "...", "pages": [{...}, ...]}}}
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence, runtime_checkable

from book_pager.models import Page

log = logging.getLogger(__name__)

# Ids with this prefix mark pages that were generated but never stored
TEMP_ID_PREFIX = "temp-"


class StoreError(Exception):
    """Raised when the store file cannot be read or written."""


class ChapterNotFoundError(LookupError):
    """Raised for a chapter id the store does not know."""


@runtime_checkable
class PageStore(Protocol):
    """Interface for page persistence keyed by (chapter_id, page_number)."""

    def list_chapters(self) -> List[str]:
        ...

    def get_chapter_content(self, chapter_id: str) -> str:
        """Full chapter text. Raises ChapterNotFoundError."""
        ...

    def set_chapter_content(self, chapter_id: str, content: str) -> None:
        """Create or overwrite the chapter text (stored pages are kept)."""
        ...

    def get_pages(self, chapter_id: str) -> List[Page]:
        """Stored pages sorted by page number; empty if none. Raises ChapterNotFoundError."""
        ...

    def replace_pages(self, chapter_id: str, pages: Sequence[Page]) -> List[Page]:
        """Replace all pages of a chapter; returns them as stored (ids assigned)."""
        ...


def _stored_id(page: Page) -> str:
    if page.id and not page.id.startswith(TEMP_ID_PREFIX):
        return page.id
    return uuid.uuid4().hex


class JsonPageStore:
    """PageStore backed by a single JSON file. Missing file = empty store."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {"chapters": {}}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise StoreError(f"Cannot read page store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Page store {self.path} does not hold a JSON object")
        if not isinstance(data.get("chapters"), dict):
            data["chapters"] = {}
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StoreError(f"Cannot write page store {self.path}: {e}") from e

    def _chapter(self, data: Dict[str, Any], chapter_id: str) -> Dict[str, Any]:
        chapter = data["chapters"].get(chapter_id)
        if chapter is None:
            raise ChapterNotFoundError(f"Chapter not found: {chapter_id}")
        return chapter

    def list_chapters(self) -> List[str]:
        return list(self._load()["chapters"])

    def get_chapter_content(self, chapter_id: str) -> str:
        return self._chapter(self._load(), chapter_id).get("content", "")

    def set_chapter_content(self, chapter_id: str, content: str) -> None:
        data = self._load()
        chapter = data["chapters"].setdefault(chapter_id, {"content": "", "pages": []})
        chapter["content"] = content
        self._save(data)

    def get_pages(self, chapter_id: str) -> List[Page]:
        raw = self._chapter(self._load(), chapter_id).get("pages", [])
        pages = [Page.model_validate(p) for p in raw]
        return sorted(pages, key=lambda p: p.page_number)

    def replace_pages(self, chapter_id: str, pages: Sequence[Page]) -> List[Page]:
        data = self._load()
        chapter = self._chapter(data, chapter_id)
        stored = [
            p.model_copy(update={"id": _stored_id(p), "chapter_id": chapter_id})
            for p in sorted(pages, key=lambda p: p.page_number)
        ]
        chapter["pages"] = [p.model_dump(mode="json") for p in stored]
        self._save(data)
        log.info("Stored %d pages for chapter %s in %s", len(stored), chapter_id, self.path)
        return stored
