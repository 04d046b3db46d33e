"""Core Layer — pure reconciliation logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the shell reads the store,
      hands plain values to core, then applies the resulting plan
"""
