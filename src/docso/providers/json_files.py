"""Documentation indexes stored as JSON files on disk.

Each package lives in ``<index_dir>/<package>.json``; packages with a path
such as ``net/http`` map to nested directories.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ValidationError

from docso.errors import FetchError
from docso.models import DocIndex, FunctionEntry, FunctionKind, TypeEntry

LOGGER = logging.getLogger(__name__)


class TypeDocument(BaseModel):
    name: str
    signature: str
    comments: List[str] = []


class FunctionDocument(BaseModel):
    name: str
    signature: str
    kind: FunctionKind = FunctionKind.PLAIN
    method_of: str = ""
    comments: List[str] = []
    example: Optional[str] = None


class IndexDocument(BaseModel):
    url: str
    types: List[TypeDocument] = []
    functions: List[FunctionDocument] = []

    def to_index(self) -> DocIndex:
        return DocIndex(
            url=self.url,
            types=tuple(
                TypeEntry(name=t.name, signature=t.signature, comments=tuple(t.comments))
                for t in self.types
            ),
            functions=tuple(
                FunctionEntry(
                    name=fn.name,
                    signature=fn.signature,
                    kind=fn.kind,
                    method_of=fn.method_of if fn.kind is FunctionKind.METHOD else "",
                    comments=tuple(fn.comments),
                    example=fn.example or None,
                )
                for fn in self.functions
            ),
        )


def package_path(index_dir: Path, package: str) -> Path:
    """Map a package name to its index file, refusing names that escape ``index_dir``."""
    parts = package.split("/")
    if "\\" in package or "\0" in package or any(part in ("", ".", "..") for part in parts):
        raise FetchError(f"Invalid package name `{package}`")
    return index_dir.joinpath(*parts[:-1], f"{parts[-1]}.json")


def load_index(path: Path) -> DocIndex:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FetchError(f"No documentation index found for `{path.stem}`") from exc
    except OSError as exc:
        LOGGER.error("Unable to read %s: %s", path, exc)
        raise FetchError(f"An error occurred while reading the index for `{path.stem}`") from exc
    except UnicodeDecodeError as exc:
        LOGGER.error("Index file %s is not valid UTF-8: %s", path, exc)
        raise FetchError(f"The index for `{path.stem}` could not be parsed") from exc

    try:
        document = IndexDocument.model_validate_json(raw)
    except ValidationError as exc:
        LOGGER.error("Invalid index file %s: %s", path, exc)
        raise FetchError(f"The index for `{path.stem}` could not be parsed") from exc
    return document.to_index()


class JsonIndexProvider:
    """Reads one JSON index file per package, off the event loop."""

    def __init__(self, index_dir: Path) -> None:
        self.index_dir = Path(index_dir)

    async def fetch_index(self, package: str) -> DocIndex:
        path = package_path(self.index_dir, package)
        LOGGER.debug("Loading index for %s from %s", package, path)
        return await asyncio.to_thread(load_index, path)
