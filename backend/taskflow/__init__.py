"""Taskflow Application Package — task lifecycle service for projects and users.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
