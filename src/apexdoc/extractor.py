#!/usr/bin/env python3

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from src.apexdoc.locator import locate_address, locate_comment
from src.apexdoc.types import DeclarationDoc, FileDocs
from src.constants import MAX_FILE_SIZE_MB, SUPPORTED_APEX_EXTENSIONS
from src.utils.progress import progress_iter

logger = logging.getLogger(__name__)


def list_apex_files(repo_root: Path) -> list[Path]:
    if repo_root.is_file():
        return [repo_root] if repo_root.suffix.lower() in SUPPORTED_APEX_EXTENSIONS else []
    max_bytes = MAX_FILE_SIZE_MB * 1024 * 1024
    files: list[Path] = []
    for path in sorted(repo_root.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in SUPPORTED_APEX_EXTENSIONS:
            continue
        if path.stat().st_size > max_bytes:
            logger.warning("Skipping %s: larger than %d MB", path, MAX_FILE_SIZE_MB)
            continue
        files.append(path)
    return files


def _rel_path(file_path: Path, repo_root: Path) -> str:
    if repo_root.is_file():
        return file_path.name
    return str(file_path.relative_to(repo_root)).replace("\\", "/")


def _minimal_file_payload(rel_path: str) -> FileDocs:
    return {
        "path": rel_path,
        "language": "apex",
        "total_lines": 0,
        "declaration_count": 0,
        "documented_count": 0,
        "docs": [],
    }


def extract_file_docs(
    file_path: Path,
    repo_root: Path,
    *,
    address_only: bool = False,
    multi_param: bool = False,
) -> FileDocs:
    """Extract the ApexDoc of every declaration in one Apex file.

    Undocumented declarations are not reported. With ``address_only`` the
    comment body is not decoded and ``doc`` is ``None``. On failure a minimal
    payload is returned so the caller can continue.
    """
    rel_path = _rel_path(file_path, repo_root)
    try:
        code = file_path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        return _minimal_file_payload(rel_path)

    try:
        from src.apexdoc.lexer import scan_source

        stream, anchors = scan_source(code)
    except Exception as e:
        logger.warning("Tokenization failed for %s: %s", rel_path, e)
        return _minimal_file_payload(rel_path)

    docs: list[DeclarationDoc] = []
    for anchor in anchors:
        if address_only:
            location = locate_address(stream, anchor.anchor_index)
            doc = None
        else:
            comment = locate_comment(stream, anchor.anchor_index, multi_param=multi_param)
            location = comment.location if comment is not None else None
            doc = comment.to_dict() if comment is not None else None
        if location is None:
            continue
        docs.append(
            {
                "file": rel_path,
                "kind": anchor.kind,
                "name": anchor.name,
                "line": anchor.line,
                "anchor_index": anchor.anchor_index,
                "location": location.to_dict(),
                "doc": doc,
            }
        )

    return {
        "path": rel_path,
        "language": "apex",
        "total_lines": len(code.splitlines()),
        "declaration_count": len(anchors),
        "documented_count": len(docs),
        "docs": docs,
    }


def extract_files_concurrently(
    files_to_process: Iterable[Path],
    repo_root: Path,
    max_workers: int,
    *,
    address_only: bool = False,
    multi_param: bool = False,
    disable_progress: bool | None = None,
) -> list[FileDocs]:
    files = list(files_to_process)
    if not files:
        return []

    results: dict[Path, FileDocs] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_file = {
            executor.submit(
                extract_file_docs,
                file_path,
                repo_root,
                address_only=address_only,
                multi_param=multi_param,
            ): file_path
            for file_path in files
        }
        for future in progress_iter(
            as_completed(future_to_file),
            total=len(files),
            desc="Extracting ApexDoc",
            disable=disable_progress,
        ):
            results[future_to_file[future]] = future.result()

    # Keep input order regardless of completion order
    return [results[f] for f in files]


__all__ = [
    "extract_file_docs",
    "extract_files_concurrently",
    "list_apex_files",
]
