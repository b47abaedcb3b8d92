"""
Load Job - drives one end-to-end load

Parse the schema, open the source, resolve the table, skip headers, then
transform and dispatch batches one at a time. Dispatch failures are collected in the
report, every other error ends the load.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from tqdm import tqdm

from bendload.config.settings import DEFAULT_BATCH_SIZE, check_format, check_profile, get_load_config
from bendload.core.extractors.source_reader import SourceSpec, open_source
from bendload.core.loaders.schema_resolver import RawSchema, resolve_table_ref
from bendload.core.loaders.statement_dispatcher import BatchOutcome, dispatch
from bendload.core.transformers.batcher import batch_lines, skip_header_lines
from bendload.core.transformers.record_transformer import build_value_list
from bendload.utils.query_client import QueryClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadRequest:
    source: SourceSpec
    table: str
    schema: Optional[str] = None
    skip_head_lines: int = 0
    batch_size: int = DEFAULT_BATCH_SIZE
    file_format: str = "csv"
    profile: str = "local"

    def __post_init__(self):
        check_format(self.file_format)
        check_profile(self.profile)
        if self.skip_head_lines < 0:
            raise ValueError(f"skip_head_lines must be non-negative, got {self.skip_head_lines}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")


@dataclass
class LoadReport:
    table: str
    table_ref: str = ""
    outcomes: List[BatchOutcome] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def batches_dispatched(self) -> int:
        return len(self.outcomes)

    @property
    def failures(self) -> List[BatchOutcome]:
        return [o for o in self.outcomes if not o.acknowledged]

    @property
    def batches_failed(self) -> int:
        return len(self.failures)

    @property
    def records_sent(self) -> int:
        return sum(o.records for o in self.outcomes if o.acknowledged)

    @property
    def completed_with_errors(self) -> bool:
        return self.batches_failed > 0


async def run_load(
    request: LoadRequest,
    client: QueryClient,
    workers: Optional[int] = None,
    fetch_timeout: Optional[int] = None,
    show_progress: bool = True,
) -> LoadReport:
    """
    Run a load and return its report

    The schema string is parsed before anything touches the network, and
    the source is opened before the first statement is sent.

    Raises:
        SourceError, StreamError, InvalidSchema, TableNotFound, QueryError,
        ConfigError: fatal errors, batches dispatched before the error stay
            loaded
    """
    start = time.perf_counter()
    report = LoadReport(table=request.table)

    if workers is None or fetch_timeout is None:
        config = get_load_config()
        workers = config["workers"] if workers is None else workers
        fetch_timeout = config["fetch_timeout"] if fetch_timeout is None else fetch_timeout

    schema = RawSchema.parse(request.schema) if request.schema is not None else None

    stream = await open_source(request.source, fetch_timeout=fetch_timeout)
    try:
        report.table_ref = await resolve_table_ref(client, request.table, schema)
        logger.info(f"Loading into {report.table_ref} in batches of {request.batch_size:,}")

        lines = skip_header_lines(stream, request.skip_head_lines)
        with ThreadPoolExecutor(max_workers=max(workers, 1)) as executor, tqdm(
            desc="Loading batches", unit="batch", ncols=100, disable=not show_progress
        ) as pbar:
            batch_number = 0
            async for batch in batch_lines(lines, request.batch_size):
                value_list = build_value_list(batch, executor=executor, workers=workers)
                if value_list is None:
                    continue

                batch_number += 1
                records = sum(1 for line in batch if line.strip())
                outcome = await dispatch(
                    client,
                    report.table_ref,
                    value_list,
                    table=request.table,
                    batch_number=batch_number,
                    records=records,
                )
                report.outcomes.append(outcome)
                pbar.update(1)
    finally:
        await stream.aclose()
        report.elapsed = time.perf_counter() - start

    logger.info(
        f"Load into {request.table} finished: {report.batches_dispatched} batches, "
        f"{report.batches_failed} failed, {report.records_sent:,} records in {report.elapsed:.2f}s"
    )
    return report
