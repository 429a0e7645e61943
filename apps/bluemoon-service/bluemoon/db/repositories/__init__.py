"""
Per-domain repository modules for database access.

Each module owns the queries for one resource; API routers call these
functions and never build queries themselves.
"""
