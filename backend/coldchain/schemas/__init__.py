"""API Schemas — Pydantic request/response models for the HTTP boundary.

Invariants:
    - Request models enforce bounded strings before anything reaches services
    - Response models mirror core views (core/shipment_views.py)
"""
