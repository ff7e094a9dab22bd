"""Infrastructure Layer — database session management, store adapter, logging.

Invariants:
    - Infrastructure implements core ports; core never imports infrastructure
    - SQLAlchemy exceptions never escape as-is: mapped to core/errors.py types
"""
