"""
Data Transformers - Line stream shaping for the load pipeline

Modules:
    batcher - Skips header lines and groups the stream into bounded batches

    record_transformer - Renders each batch into an INSERT value list on a
                         thread pool
"""
