"""Shared fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from docso.models import DocIndex, FunctionEntry, FunctionKind, TypeEntry

STRINGS_URL = "https://pkg.go.dev/strings"


@pytest.fixture
def strings_index() -> DocIndex:
    return DocIndex(
        url=STRINGS_URL,
        types=(
            TypeEntry(
                name="Builder",
                signature="type Builder struct {\n\t// contains filtered or unexported fields\n}",
                comments=("A Builder is used to efficiently build a string.",),
            ),
            TypeEntry(name="Reader", signature="type Reader struct{}", comments=()),
        ),
        functions=(
            FunctionEntry(
                name="Contains",
                signature="func Contains(s, substr string) bool",
                comments=("Contains reports whether substr is within s.",),
                example='fmt.Println(strings.Contains("seafood", "foo"))',
            ),
            FunctionEntry(
                name="ToUpper",
                signature="func ToUpper(s string) string",
                comments=(),
            ),
            FunctionEntry(
                name="WriteString",
                signature="func (b *Builder) WriteString(s string) (int, error)",
                kind=FunctionKind.METHOD,
                method_of="Builder",
                comments=("WriteString appends the contents of s to b's buffer.", "It returns nil."),
            ),
            FunctionEntry(
                name="WriteByte",
                signature="func (b *Builder) WriteByte(c byte) error",
                kind=FunctionKind.METHOD,
                method_of="Builder",
                comments=("WriteByte appends the byte c to b's buffer.",),
            ),
            FunctionEntry(
                name="Read",
                signature="func (r *Reader) Read(b []byte) (n int, err error)",
                kind=FunctionKind.METHOD,
                method_of="Reader",
                comments=("Read implements the io.Reader interface.",),
            ),
        ),
    )


@pytest.fixture
def strings_document() -> dict[str, Any]:
    return {
        "url": STRINGS_URL,
        "types": [
            {
                "name": "Builder",
                "signature": "type Builder struct{}",
                "comments": ["A Builder is used to efficiently build a string."],
            }
        ],
        "functions": [
            {
                "name": "Contains",
                "signature": "func Contains(s, substr string) bool",
                "comments": ["Contains reports whether substr is within s."],
            },
            {
                "name": "WriteString",
                "signature": "func (b *Builder) WriteString(s string) (int, error)",
                "kind": "method",
                "method_of": "Builder",
                "comments": ["WriteString appends the contents of s to b's buffer."],
            },
        ],
    }


@pytest.fixture
def write_index(tmp_path: Path) -> Callable[[str, dict[str, Any]], Path]:
    """Write ``document`` as the JSON index of ``package`` under ``tmp_path``."""

    def _write(package: str, document: dict[str, Any]) -> Path:
        path = tmp_path.joinpath(*package.split("/")[:-1], f"{package.split('/')[-1]}.json")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write
