"""
Data Loaders - Statements sent to the Databend query endpoint

Modules:
    schema_resolver - Verifies the target table exists or creates it from a
                      name:type schema string

    statement_dispatcher - Sends each batch as one INSERT statement and
                           reports a per-batch outcome
"""
