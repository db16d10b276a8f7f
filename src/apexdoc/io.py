#!/usr/bin/env python3

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TextIO


def dump_docs(files_docs: list[Any], stream: TextIO) -> None:
    json.dump(files_docs, stream, ensure_ascii=False, indent=2)
    stream.write("\n")


def write_docs_json(path: Path, files_docs: list[Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(files_docs, ensure_ascii=False, indent=2), encoding="utf-8")


def read_docs_json(path: Path) -> list[dict[str, Any]]:
    return json.loads(path.read_text(encoding="utf-8"))
