"""Pydantic Schemas — validation for collaborator payloads.

Invariants:
    - Schemas validate at the system boundary (store, compiler, socket events)
    - Inbound schemas convert to frozen core values via to_domain(); the
      outbound settings schema is built from one via from_domain()

Design Decisions:
    - Separate from core: schemas are wire contracts, core types are domain values
"""
