"""Core Layer: domain records, in-memory stores and pure query/evaluation logic.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - No module in core/ logs or reads the wall clock; time arrives through a Clock

Design Decisions:
    - Functional core separated from imperative shell: stores own state behind locks,
      query and work-hours functions stay pure
"""
