"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP, filesystem, and
    test doubles) used by use cases.

Dependencies:
    ``balance_rest`` depends on ``requests`` through ``http_client``;
    ``storage_local`` uses the filesystem only.

Call context:
    Imported by ``balancekit.app.controller`` for runtime wiring and by tests
    for transport-level behavior verification.
"""
