"""
bendload - Streaming CSV bulk loader for Databend

Reads a delimited text source (file, URL or stdin), checks or creates the
target table, and sends the rows as batched INSERT statements over the
HTTP statement endpoint.
"""

__version__ = "0.1.0"
