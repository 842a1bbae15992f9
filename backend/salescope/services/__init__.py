"""Services Layer — orchestrates the core over pinned snapshots and the database.

Invariants:
    - Services pin one snapshot per query (store.current() called once)
    - Only seed_import writes: DB rows first, snapshot publish second
"""
