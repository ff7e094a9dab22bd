"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every endpoint answers with an Envelope body; envelope code = HTTP status

Design Decisions:
    - Thin routes delegate to TaskService or the Repository port
"""
