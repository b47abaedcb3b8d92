import io
import sys
from unittest.mock import MagicMock, patch

import pytest
import requests

from bendload.core.extractors.source_reader import (
    LocalPath,
    RemoteUrl,
    Stdin,
    open_source,
    resolve_source,
)
from bendload.utils.errors import SourceError, StreamError


async def read_all(stream):
    try:
        return [line async for line in stream]
    finally:
        await stream.aclose()


def test_resolve_source_variants(csv_file):
    path = csv_file(["1,a"])
    assert resolve_source(str(path)) == LocalPath(str(path))
    assert resolve_source("https://example.com/data.csv") == RemoteUrl("https://example.com/data.csv")
    assert resolve_source("http://example.com/data.csv") == RemoteUrl("http://example.com/data.csv")
    assert resolve_source(None) == Stdin()
    assert resolve_source("-") == Stdin()


def test_resolve_source_missing_path(tmp_path):
    with pytest.raises(SourceError, match="cannot find file"):
        resolve_source(str(tmp_path / "nope.csv"))


@pytest.mark.asyncio
async def test_local_file_lines(csv_file):
    path = csv_file(["1,a", "2,b", "3,c"])
    stream = await open_source(LocalPath(str(path)))
    assert await read_all(stream) == ["1,a", "2,b", "3,c"]
    assert stream.lines_read == 3


@pytest.mark.asyncio
async def test_local_file_crlf_and_no_trailing_newline(tmp_path):
    path = tmp_path / "crlf.csv"
    path.write_bytes(b"1,a\r\n2,b")
    stream = await open_source(LocalPath(str(path)))
    assert await read_all(stream) == ["1,a", "2,b"]


@pytest.mark.asyncio
async def test_local_file_missing(tmp_path):
    with pytest.raises(SourceError):
        await open_source(LocalPath(str(tmp_path / "gone.csv")))


@pytest.mark.asyncio
async def test_undecodable_line_is_stream_error(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_bytes(b"\xff\xfe\xfa\n")
    stream = await open_source(LocalPath(str(path)))
    with pytest.raises(StreamError):
        await read_all(stream)


@pytest.mark.asyncio
async def test_remote_source_lines():
    response = MagicMock()
    response.text = "1,a\n2,b\n"
    with patch("bendload.core.extractors.source_reader.requests.get", return_value=response) as mock_get:
        stream = await open_source(RemoteUrl("https://example.com/data.csv"), fetch_timeout=5)
        assert await read_all(stream) == ["1,a", "2,b"]
    mock_get.assert_called_once_with("https://example.com/data.csv", timeout=5)


@pytest.mark.asyncio
async def test_remote_fetch_failure():
    with patch(
        "bendload.core.extractors.source_reader.requests.get",
        side_effect=requests.ConnectionError("refused"),
    ):
        with pytest.raises(SourceError, match="cannot fetch"):
            await open_source(RemoteUrl("http://example.invalid/data.csv"))


@pytest.mark.asyncio
async def test_remote_http_error_status():
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    with patch("bendload.core.extractors.source_reader.requests.get", return_value=response):
        with pytest.raises(SourceError):
            await open_source(RemoteUrl("https://example.com/missing.csv"))


@pytest.mark.asyncio
async def test_stdin_lines(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("h\n1,a\n2,b\n"))
    stream = await open_source(Stdin())
    assert await read_all(stream) == ["h", "1,a", "2,b"]


def _stdin_bytes(monkeypatch, data, encoding="latin-1"):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data), encoding=encoding))


@pytest.mark.asyncio
async def test_stdin_is_read_as_utf8_whatever_the_locale(monkeypatch):
    _stdin_bytes(monkeypatch, "é,1\nü,2\n".encode("utf-8"))
    stream = await open_source(Stdin())
    assert await read_all(stream) == ["é,1", "ü,2"]


@pytest.mark.asyncio
async def test_stdin_invalid_utf8_is_stream_error(monkeypatch):
    _stdin_bytes(monkeypatch, b"1,a\n\xff\n")
    stream = await open_source(Stdin())
    with pytest.raises(StreamError, match="<stdin>"):
        await read_all(stream)
