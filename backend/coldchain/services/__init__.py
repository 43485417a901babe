"""Services Layer — imperative shell around the pure shipment core.

Invariants:
    - Services load state, call core validators/transitions, then persist
    - Every mutating call runs under the registry write lock in one DB transaction

Design Decisions:
    - Impureim sandwich: IO -> pure decision -> IO
"""
