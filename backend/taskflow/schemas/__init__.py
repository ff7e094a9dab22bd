"""Pydantic Schemas — request shape validation for API endpoints.

Invariants:
    - Schemas check shape only (types, presence, unknown fields); value rules
      such as status and due date belong to TaskService
    - camelCase aliases accepted alongside snake_case field names
"""
