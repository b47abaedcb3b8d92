"""
Data Extractors - Line sources for the load pipeline

Modules:
    source_reader - Opens local files (aiofiles), http(s) URLs (requests) and
                    standard input as lazy async line streams
"""
