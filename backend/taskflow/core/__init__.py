"""Core Layer — domain types, error taxonomy, envelope and pure task rules.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO: everything here is deterministic given its inputs

Design Decisions:
    - Ports (repository_protocols) live here; adapters live in infrastructure/
      and services/ so dependency arrows point inward only
"""
