"""
Core utilities shared across the clinic package.

This package hosts:
- configuration helpers (env vars, storage paths, backend selection)
- cross-cutting concerns such as logging setup

Repositories and services depend on these primitives instead of reading
os.environ directly.
"""
