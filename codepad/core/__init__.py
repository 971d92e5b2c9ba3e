"""Core Layer — pure workspace logic, no IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, schemas/, infrastructure/, or config
    - All functions are pure and deterministic
    - State values are frozen; every transition returns a new value

Design Decisions:
    - Functional core separated from imperative shell: reduce() returns commands
      as data, services/runtime.py executes them
"""
