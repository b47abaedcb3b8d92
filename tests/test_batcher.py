import math

import pytest

from bendload.core.transformers.batcher import batch_lines, skip_header_lines


async def agen(items):
    for item in items:
        yield item


async def collect(aiterable):
    return [item async for item in aiterable]


@pytest.mark.asyncio
@pytest.mark.parametrize("count,total", [(0, 5), (2, 5), (5, 5), (9, 5), (3, 0)])
async def test_skip_never_yields_header_lines(count, total):
    lines = [f"line{i}" for i in range(total)]
    result = await collect(skip_header_lines(agen(lines), count))
    assert result == lines[count:]


@pytest.mark.asyncio
async def test_skip_rejects_negative_count():
    with pytest.raises(ValueError):
        await collect(skip_header_lines(agen(["a"]), -1))


@pytest.mark.asyncio
@pytest.mark.parametrize("size,total", [(1, 5), (2, 5), (5, 5), (7, 5), (3, 9), (100_000, 10)])
async def test_batch_count_is_ceiling(size, total):
    lines = [f"{i},x" for i in range(total)]
    batches = await collect(batch_lines(agen(lines), size))
    assert len(batches) == math.ceil(total / size)
    assert all(0 < len(b) <= size for b in batches)
    assert [line for b in batches for line in b] == lines


@pytest.mark.asyncio
async def test_blank_batches_are_dropped():
    lines = ["1,a", "2,b", "", "   ", "\t", "", "3,c"]
    batches = await collect(batch_lines(agen(lines), 2))
    # ["1,a","2,b"], ["",""] dropped, ["\t",""] dropped, ["3,c"]
    assert batches == [["1,a", "2,b"], ["3,c"]]


@pytest.mark.asyncio
async def test_batch_keeps_partial_blank_lines():
    batches = await collect(batch_lines(agen(["1,a", "  "]), 5))
    assert batches == [["1,a", "  "]]


@pytest.mark.asyncio
async def test_empty_stream_yields_nothing():
    assert await collect(batch_lines(agen([]), 3)) == []


@pytest.mark.asyncio
async def test_batch_rejects_zero_size():
    with pytest.raises(ValueError):
        await collect(batch_lines(agen(["a"]), 0))
