"""Infrastructure Layer — database sessions, logging, and the logical clock.

Invariants:
    - Infrastructure never imports from core/ domain logic except core/errors.py
    - All SQLAlchemy failures mapped to DatabaseError
"""
