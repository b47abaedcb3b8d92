"""
Schema type checks
Normalizes user supplied column type names to Databend type families
"""

import re
from typing import Optional

# Type family -> accepted spellings (upper case, parameters stripped)
DATABEND_TYPE_FAMILIES = {
    "INTEGER": [
        "INT8",
        "INT16",
        "INT32",
        "INT64",
        "UINT8",
        "UINT16",
        "UINT32",
        "UINT64",
        "TINYINT",
        "SMALLINT",
        "INT",
        "INTEGER",
        "BIGINT",
    ],
    "FLOAT": ["FLOAT32", "FLOAT64", "FLOAT", "DOUBLE", "REAL"],
    "DECIMAL": ["DECIMAL", "NUMERIC"],
    "BOOLEAN": ["BOOLEAN", "BOOL"],
    "STRING": ["STRING", "VARCHAR", "CHAR", "TEXT"],
    "DATETIME": ["DATE", "DATE16", "DATE32", "DATETIME", "DATETIME32", "DATETIME64", "TIMESTAMP"],
    "SEMI_STRUCTURED": ["VARIANT", "JSON", "ARRAY", "OBJECT", "MAP", "TUPLE"],
}


def _base_type(type_name: str) -> str:
    # uint8 -> UINT8, decimal(10,2) -> DECIMAL, Nullable(Int32) -> INT32
    t = type_name.strip().upper()
    nullable = re.match(r"^NULLABLE\((.*)\)$", t)
    if nullable:
        t = nullable.group(1)
    return t.split("(")[0].strip()


def type_family(type_name: str) -> Optional[str]:
    """
    Resolve the type family of a column type name.

    Args:
        type_name: Type as written in the schema string, e.g. "uint8"

    Returns:
        Family name such as "INTEGER", or None if the type is not recognised
    """
    base = _base_type(type_name)
    for family, spellings in DATABEND_TYPE_FAMILIES.items():
        if base in spellings:
            return family
    return None


def is_known_type(type_name: str) -> bool:
    return type_family(type_name) is not None
