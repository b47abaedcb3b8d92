"""
Databend Reserved Keywords
Detects reserved keywords used as column names in a load schema
"""

# Reserved words rejected as bare identifiers by the Databend parser
DATABEND_RESERVED_KEYWORDS = {
    # A
    "ALL",
    "ALTER",
    "AND",
    "ANY",
    "AS",
    "ASC",
    # B
    "BETWEEN",
    "BY",
    # C
    "CASE",
    "CAST",
    "CREATE",
    "CROSS",
    # D
    "DATABASE",
    "DEFAULT",
    "DELETE",
    "DESC",
    "DISTINCT",
    "DROP",
    # E
    "ELSE",
    "END",
    "ENGINE",
    "EXISTS",
    "EXPLAIN",
    # F
    "FALSE",
    "FROM",
    "FULL",
    # G
    "GROUP",
    # H
    "HAVING",
    # I
    "IN",
    "INNER",
    "INSERT",
    "INTERVAL",
    "INTO",
    "IS",
    # J
    "JOIN",
    # L
    "LEFT",
    "LIKE",
    "LIMIT",
    # N
    "NOT",
    "NULL",
    # O
    "OFFSET",
    "ON",
    "OR",
    "ORDER",
    "OUTER",
    # R
    "RIGHT",
    # S
    "SELECT",
    "SETTINGS",
    "SHOW",
    # T
    "TABLE",
    "TABLES",
    "THEN",
    "TRUE",
    # U
    "UNION",
    "USING",
    # V
    "VALUES",
    # W
    "WHEN",
    "WHERE",
    "WITH",
}


def is_reserved_keyword(column_name: str) -> bool:
    """
    Check if a column name is a Databend reserved keyword.

    Args:
        column_name: Name to check (case-insensitive)

    Returns:
        True if the name is exactly a reserved keyword, False otherwise
    """
    # Exact match only - case insensitive
    return column_name.upper() in DATABEND_RESERVED_KEYWORDS


def find_reserved_columns(column_names):
    """Return the column names that collide with reserved keywords, in order"""
    return [name for name in column_names if is_reserved_keyword(name)]
