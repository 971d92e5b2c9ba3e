"""Services Layer — the imperative shell around the reducer.

Invariants:
    - Only the runtime performs IO on behalf of the core
    - Collaborators reached exclusively through core/repository_protocols.py
"""
