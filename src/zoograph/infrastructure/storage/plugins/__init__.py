"""
Storage plugins.

- memory: dict-backed repositories, used by tests and short-lived sessions
- sqlite: sqlite3-backed repositories
"""
