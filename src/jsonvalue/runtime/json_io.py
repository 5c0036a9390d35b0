from __future__ import annotations

import sys
from pathlib import Path
from typing import BinaryIO

from jsonvalue.parser import MAX_DEPTH, MultiParseOutcome, ParseOutcome, parse_checked, parse_multi
from jsonvalue.value import Value

STDIO_ALIAS = "-"


def _is_stdio(path: Path | None) -> bool:
    return path is None or str(path) == STDIO_ALIAS


def read_document_bytes(path: Path | None, *, stdin: BinaryIO | None = None) -> bytes:
    """Read a whole document from `path`, or from stdin for None / ``-``.

    Bytes are returned undecoded; the parser reports invalid UTF-8 as a parse
    failure.
    """
    if _is_stdio(path):
        stream = stdin if stdin is not None else sys.stdin.buffer
        return stream.read()
    return path.read_bytes()


def load_value_path(
    path: Path | None,
    *,
    max_depth: int = MAX_DEPTH,
    stdin: BinaryIO | None = None,
) -> ParseOutcome:
    return parse_checked(read_document_bytes(path, stdin=stdin), max_depth=max_depth)


def load_values_path(
    path: Path | None,
    *,
    max_depth: int = MAX_DEPTH,
    stdin: BinaryIO | None = None,
) -> MultiParseOutcome:
    return parse_multi(read_document_bytes(path, stdin=stdin), max_depth=max_depth)


def dump_value_path(path: Path, value: Value) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(value.to_text() + "\n", encoding="utf-8", errors="surrogatepass")
