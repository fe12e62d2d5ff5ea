"""Example scripts for Parsed File Manager.

Available examples:

basic_usage.py
    Manage host entries in a hosts file: prefetch, create, update,
    destroy, flush, and inspect the backups taken along the way.
    Start here to understand the core workflow.

positional_matching.py
    Bind renamed entries to desired specs by address instead of by name,
    and manage entries spread over several targets.

Run any example:
    python examples/basic_usage.py
    python examples/positional_matching.py
"""
