"""
ETL Jobs - Load orchestration

Modules:
    load_job - Async driver for one load: schema resolution, batching and
               sequential dispatch with a per-batch outcome report
"""
