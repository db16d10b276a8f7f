#!/usr/bin/env python3

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator
from typing import TypeVar

from tqdm import tqdm

T = TypeVar("T")


def _progress_disabled(explicit_disable: bool | None) -> bool:
    if explicit_disable is not None:
        return explicit_disable
    flag = os.getenv("APEXDOC_PROGRESS", "").lower().strip()
    if flag in {"0", "false", "off", "no"}:
        return True
    return not sys.stderr.isatty()


def progress_iter(
    iterable: Iterable[T],
    *,
    total: int | None = None,
    desc: str | None = None,
    unit: str = "file",
    disable: bool | None = None,
) -> Iterator[T]:
    """Yield items from iterable, displaying a progress bar on stderr.

    The bar is updated manually rather than wrapping the iterable so that
    generators such as ``as_completed`` are consumed exactly once, and it is
    always closed explicitly.
    """
    if _progress_disabled(disable):
        yield from iterable
        return

    pbar = tqdm(total=total, desc=desc, unit=unit, file=sys.stderr)
    try:
        for item in iterable:
            yield item
            pbar.update(1)
    finally:
        pbar.close()
