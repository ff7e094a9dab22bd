"""Services Layer — task lifecycle orchestration and collaborator adapters.

Invariants:
    - Services depend on core ports, never on concrete infrastructure classes
    - Every public service operation returns an Envelope and never raises
"""
