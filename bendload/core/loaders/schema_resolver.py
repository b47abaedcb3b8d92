"""
Schema Resolver - verifies or creates the target table before loading

Without a schema the table must already exist. With a schema the table is
created when missing, and rows are inserted against its declared column list.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from bendload.utils.errors import InvalidSchema, TableNotFound
from bendload.utils.query_client import QueryClient
from bendload.utils.reserved_keywords import find_reserved_columns
from bendload.utils.schema_validator import is_known_type

logger = logging.getLogger(__name__)

SCHEMA_FORMAT_HINT = "please input schema in format like a:uint8,b:uint64"


@dataclass(frozen=True)
class RawSchema:
    """Ordered (name, type) pairs in declaration order"""

    columns: Tuple[Tuple[str, str], ...]

    @classmethod
    def parse(cls, text: str) -> "RawSchema":
        """
        Parse ``name:type, name:type`` into a RawSchema

        Whitespace anywhere in the string is ignored. Every comma separated
        field must split into exactly one name and one type.

        Raises:
            InvalidSchema: malformed field or duplicate column name
        """
        compact = re.sub(r"\s+", "", text or "")
        columns: List[Tuple[str, str]] = []
        seen = set()

        for field in compact.split(","):
            elems = [e for e in field.split(":") if e]
            if len(elems) != 2:
                raise InvalidSchema(f"not a valid schema, {SCHEMA_FORMAT_HINT}")
            name, col_type = elems
            if name in seen:
                raise InvalidSchema(f"duplicate column {name} in schema")
            seen.add(name)
            columns.append((name, col_type))

        schema = cls(tuple(columns))
        schema._warn_suspicious()
        return schema

    def _warn_suspicious(self):
        for name in find_reserved_columns(self.names):
            logger.warning(f"Column {name} is a reserved keyword, the statement may be rejected")
        for name, col_type in self.columns:
            if not is_known_type(col_type):
                logger.warning(f"Column {name} has unrecognised type {col_type}")

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.columns]

    def column_list(self) -> str:
        return ", ".join(self.names)

    def to_sql(self) -> str:
        return ", ".join(f"{name} {col_type}" for name, col_type in self.columns)


def show_tables_statement(table: str) -> str:
    return f"SHOW TABLES LIKE '{table}';"


def create_table_statement(table: str, schema: RawSchema) -> str:
    return f"CREATE TABLE {table}({schema.to_sql()}) Engine = Fuse;"


async def table_exists(client: QueryClient, table: str) -> bool:
    """True when SHOW TABLES LIKE returns at least one row"""
    result = await client.execute_async(show_tables_statement(table))
    return result.has_rows()


async def verify_table(client: QueryClient, table: str):
    if not await table_exists(client, table):
        raise TableNotFound(table)
    logger.info(f"Table {table} exists")


async def resolve_table_ref(
    client: QueryClient, table: str, schema_text: Optional[Union[str, RawSchema]] = None
) -> str:
    """
    Resolve the table reference used by every INSERT of the load

    Args:
        client: Query endpoint client
        table: Target table name
        schema_text: Optional ``name:type`` list, or an already parsed RawSchema

    Returns:
        ``table`` when the table already exists, ``table (c1, c2)`` when it
        was created from the schema

    Raises:
        InvalidSchema: schema_text is malformed (raised before any request)
        TableNotFound: no schema given and the table is absent
        QueryError: the existence check or the creation statement failed
    """
    if not table:
        raise TableNotFound("<empty>")

    if schema_text is None:
        await verify_table(client, table)
        return table

    schema = schema_text if isinstance(schema_text, RawSchema) else RawSchema.parse(schema_text)

    if await table_exists(client, table):
        logger.info(f"Table {table} already exists, supplied schema is ignored")
        return table

    statement = create_table_statement(table, schema)
    logger.info(f"Creating table: {statement}")
    await client.execute_async(statement)
    logger.info(f"Table {table} created successfully")
    return f"{table} ({schema.column_list()})"
