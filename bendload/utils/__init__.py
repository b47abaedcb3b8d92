"""
Shared utilities - errors, HTTP query client and schema helpers
"""
