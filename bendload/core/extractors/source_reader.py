"""
Source Reader - line streams over local files, URLs and stdin

Every source is opened eagerly (so open failures surface before any batch
is read) and then consumed as a lazy, single-pass async stream of lines.
"""

import asyncio
import io
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable, Optional, Union

import aiofiles
import requests

from bendload.utils.errors import SourceError, StreamError

logger = logging.getLogger(__name__)

# Bytes requested per stdin read, stdin is pulled in blocks on a worker thread
STDIN_READ_HINT = 1 << 20


@dataclass(frozen=True)
class LocalPath:
    path: str


@dataclass(frozen=True)
class RemoteUrl:
    url: str


@dataclass(frozen=True)
class Stdin:
    pass


SourceSpec = Union[LocalPath, RemoteUrl, Stdin]


def is_remote_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def resolve_source(value: Optional[str]) -> SourceSpec:
    """
    Turn the load argument into a SourceSpec

    Args:
        value: File path or URL, None (or "-") for standard input

    Returns:
        LocalPath, RemoteUrl or Stdin

    Raises:
        SourceError: value is neither an existing path nor an http(s) URL
    """
    if value is None or value == "-":
        return Stdin()
    if Path(value).exists():
        return LocalPath(value)
    if is_remote_url(value):
        return RemoteUrl(value)
    raise SourceError(f"cannot find file {value}")


class LineStream:
    """Forward-only async iterator of lines with trailing newlines removed"""

    def __init__(
        self,
        lines: AsyncIterator[str],
        name: str,
        closer: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self._lines = lines
        self.name = name
        self._closer = closer
        self.lines_read = 0

    def __aiter__(self):
        return self

    async def __anext__(self) -> str:
        try:
            line = await self._lines.__anext__()
        except StopAsyncIteration:
            raise
        except (OSError, UnicodeDecodeError) as e:
            raise StreamError(f"cannot read line {self.lines_read + 1} of {self.name}: {e}") from e
        self.lines_read += 1
        return line.rstrip("\r\n")

    async def aclose(self):
        if self._closer is not None:
            await self._closer()
            self._closer = None


async def _iter_text(text: str) -> AsyncIterator[str]:
    for line in io.StringIO(text):
        yield line


async def _iter_file(handle) -> AsyncIterator[str]:
    async for line in handle:
        yield line


def _utf8_stdin():
    # Decode stdin strictly as UTF-8 like local files, whatever the locale says
    stream = sys.stdin
    if hasattr(stream, "reconfigure"):
        stream.reconfigure(encoding="utf-8", errors="strict")
    return stream


async def _iter_stdin(stream) -> AsyncIterator[str]:
    while True:
        block = await asyncio.to_thread(stream.readlines, STDIN_READ_HINT)
        if not block:
            return
        for line in block:
            yield line


async def _open_local(path: str) -> LineStream:
    if not Path(path).exists():
        raise SourceError(f"cannot find file {path}")
    try:
        handle = await aiofiles.open(path, "r", encoding="utf-8")
    except PermissionError as e:
        raise SourceError(f"cannot open file {path}: permission denied") from e
    except OSError as e:
        raise SourceError(f"cannot open file {path}: {e}") from e

    logger.info(f"Reading local file: {path}")
    return LineStream(_iter_file(handle), path, closer=handle.close)


async def _open_remote(url: str, timeout: int) -> LineStream:
    logger.info(f"Fetching remote source: {url}")
    try:
        response = await asyncio.to_thread(requests.get, url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceError(f"cannot fetch {url}: {e}") from e

    body = response.text
    logger.info(f"Fetched {len(body):,} characters from {url}")
    return LineStream(_iter_text(body), url)


async def open_source(spec: SourceSpec, fetch_timeout: int = 300) -> LineStream:
    """
    Open a source as a line stream

    Args:
        spec: LocalPath, RemoteUrl or Stdin
        fetch_timeout: Seconds allowed for a remote fetch

    Returns:
        LineStream positioned at the first line

    Raises:
        SourceError: missing path, permission denied or failed fetch
    """
    if isinstance(spec, LocalPath):
        return await _open_local(spec.path)
    if isinstance(spec, RemoteUrl):
        return await _open_remote(spec.url, fetch_timeout)
    if isinstance(spec, Stdin):
        logger.info("Reading from standard input")
        return LineStream(_iter_stdin(_utf8_stdin()), "<stdin>")
    raise SourceError(f"unsupported source: {spec!r}")
