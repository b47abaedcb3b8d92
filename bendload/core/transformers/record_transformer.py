"""
Record Transformer - renders a batch of raw lines as an INSERT value list

Each non-blank line becomes a parenthesized tuple of its trimmed text, e.g.
``1,a`` -> ``(1,a)``. No quoting or escaping is applied.

The batch is split into slices rendered on a thread pool. Slices are folded
in completion order, so fragment order inside one value list is not the
source order. Batches themselves stay in order.
"""

import math
from concurrent.futures import Executor, as_completed
from typing import List, Optional, Sequence

# Below this many lines per slice the pool overhead outweighs the work
MIN_SLICE_SIZE = 2048


def to_value_fragment(line: str) -> Optional[str]:
    """Wrap a trimmed line in parentheses, None for a blank line"""
    trimmed = line.strip()
    if not trimmed:
        return None
    return f"({trimmed})"


def render_slice(lines: Sequence[str]) -> Optional[str]:
    """Render a slice of lines into a comma-joined fragment list"""
    fragments = [fragment for fragment in map(to_value_fragment, lines) if fragment is not None]
    if not fragments:
        return None
    return ", ".join(fragments)


def split_batch(batch: Sequence[str], workers: int, min_slice: int = MIN_SLICE_SIZE) -> List[Sequence[str]]:
    if not batch:
        return []
    slice_size = max(min_slice, math.ceil(len(batch) / max(workers, 1)))
    return [batch[i : i + slice_size] for i in range(0, len(batch), slice_size)]


def build_value_list(
    batch: Sequence[str],
    executor: Optional[Executor] = None,
    workers: int = 1,
    min_slice: int = MIN_SLICE_SIZE,
) -> Optional[str]:
    """
    Transform a batch into the value list of one INSERT statement

    Args:
        batch: Raw lines of one batch
        executor: Pool used to render slices, inline rendering when None
        workers: Number of slices to aim for
        min_slice: Smallest slice handed to a worker

    Returns:
        ``(a), (b), ...`` or None when every line was blank
    """
    slices = split_batch(batch, workers, min_slice)
    if executor is None or len(slices) <= 1:
        parts = [render_slice(s) for s in slices]
    else:
        futures = [executor.submit(render_slice, s) for s in slices]
        parts = [future.result() for future in as_completed(futures)]

    values = None
    for part in parts:
        if part is None:
            continue
        values = part if values is None else f"{values}, {part}"
    return values
