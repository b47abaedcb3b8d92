"""
Statement Dispatcher - sends one batch as one INSERT statement
"""

import logging
from dataclasses import dataclass
from typing import Optional

from bendload.utils.errors import DispatchError, QueryError
from bendload.utils.query_client import QueryClient

logger = logging.getLogger(__name__)


@dataclass
class BatchOutcome:
    batch_number: int
    records: int
    acknowledged: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls, batch_number: int, records: int) -> "BatchOutcome":
        return cls(batch_number, records, True)

    @classmethod
    def failed(cls, batch_number: int, records: int, message: str) -> "BatchOutcome":
        return cls(batch_number, records, False, message)


def build_insert_statement(table_ref: str, value_list: str) -> str:
    return f"INSERT INTO {table_ref} VALUES {value_list};"


async def dispatch(
    client: QueryClient,
    table_ref: str,
    value_list: str,
    table: Optional[str] = None,
    batch_number: int = 1,
    records: int = 0,
) -> BatchOutcome:
    """
    Submit one INSERT statement and report the outcome

    A rejected statement is logged and returned as a failed outcome, it
    never raises.

    Args:
        client: Query endpoint client
        table_ref: ``table`` or ``table (c1, c2)``
        value_list: Rendered ``(..), (..)`` fragments
        table: Table name used in the diagnostic (defaults to table_ref)
        batch_number: 1-based batch index
        records: Number of records in the value list
    """
    statement = build_insert_statement(table_ref, value_list)
    try:
        await client.execute_async(statement)
    except QueryError as e:
        error = DispatchError(table or table_ref, e)
        logger.error(f"Batch {batch_number}: {error}")
        return BatchOutcome.failed(batch_number, records, str(error))

    logger.info(f"Batch {batch_number} inserted: {records} rows")
    return BatchOutcome.ok(batch_number, records)
