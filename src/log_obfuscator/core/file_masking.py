"""Mask log files line by line (plain text or gzip)."""

from __future__ import annotations

import gzip
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .masker import SensitiveDataMasker


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a log file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


async def iter_masked_lines(
    log_path: str | Path,
    masker: SensitiveDataMasker,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
    contains: str | None = None,
) -> AsyncIterator[tuple[int, str]]:
    """Yield `(line_no, masked_line)` pairs, line endings stripped.

    `contains` keeps only lines whose raw (unmasked) text includes it.
    """
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as f:
        line_no = 0
        async for line in f:
            line_no += 1
            line = line.rstrip("\r\n")
            if contains is not None and contains not in line:
                continue
            yield line_no, masker.process(line)


async def mask_file(
    src: str | Path,
    dest: str | Path,
    masker: SensitiveDataMasker,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> int:
    """Write a masked copy of `src` to `dest` and return the number of lines.

    `dest` must not resolve to `src`: it is truncated before `src` is read.
    """
    if not Path(src).is_file():
        raise FileNotFoundError(f"Log file not found: {src}")
    if Path(src).resolve() == Path(dest).resolve():
        raise ValueError(f"Destination must differ from the source log: {dest}")
    count = 0
    async with aiofiles.open(dest, mode="w", encoding=encoding) as out:
        async for _, line in iter_masked_lines(src, masker, encoding=encoding, decode_errors=decode_errors):
            await out.write(line + "\n")
            count += 1
    return count
