"""Infrastructure Layer: cross-cutting concerns and startup IO.

Invariants:
    - Logging setup and seed file reading live here, never in core/
    - File IO errors mapped to typed exceptions before they reach services/
"""
