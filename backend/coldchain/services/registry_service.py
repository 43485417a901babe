"""Registry Service Base — write serialization and per-operation transaction boundary.

Invariants:
    - At most one mutating operation runs at a time per event loop (single writer)
    - transaction() commits exactly once on success and rolls back on any exception
    - Validation errors escape before anything is written; rollback is a no-op for them
    - The call timestamp is fixed inside the lock, so log sequences and
      timestamps advance together

Design Decisions:
    - asyncio.Lock keyed by running loop: the registry is single-process, and a lock
      bound at import time would break under a fresh loop (tests, reloads)
    - Module-level lock table is a deliberate exception to the no-global-state rule
"""

import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from coldchain.core.domain_types import ShipmentId
from coldchain.core.errors import ShipmentNotFoundError, ErrorContext
from coldchain.core.shipment_state import CallContext, ShipmentRecord
from coldchain.infrastructure import logical_clock
from coldchain.services.registry_store import RegistryStore

logger = logging.getLogger(__name__)

_write_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = (
    weakref.WeakKeyDictionary()
)


def registry_write_lock() -> asyncio.Lock:
    """The single-writer lock for the current event loop."""
    loop = asyncio.get_running_loop()
    lock = _write_locks.get(loop)
    if lock is None:
        lock = asyncio.Lock()
        _write_locks[loop] = lock
    return lock


class RegistryService:
    """Shared plumbing for lifecycle, logging and authorization services."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = RegistryStore(db)

    @asynccontextmanager
    async def transaction(
        self, ctx: CallContext,
    ) -> AsyncGenerator[tuple[RegistryStore, CallContext], None]:
        """Serialize the write, stamp its logical time and commit it atomically."""
        async with registry_write_lock():
            stamped = logical_clock.clock.stamp(ctx)
            try:
                yield self.store, stamped
                await self.db.commit()
            except BaseException:
                await self.db.rollback()
                raise

    async def load_shipment(
        self, shipment_id: ShipmentId, operation: str,
    ) -> ShipmentRecord:
        record = await self.store.get_shipment(shipment_id)
        if record is None:
            raise ShipmentNotFoundError(
                shipment_id,
                ErrorContext(shipment_id=shipment_id, operation=operation),
            )
        return record
