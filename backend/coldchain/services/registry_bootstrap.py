"""Registry Bootstrap — one-time initialization of owner, counter and owner authorization.

Invariants:
    - Idempotent: a second run never resets the counter or changes the owner
    - Log sequence counter starts at FIRST_LOG_SEQUENCE (1)
    - The owner is pre-authorized on first initialization
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from coldchain.core.domain_types import FIRST_LOG_SEQUENCE, Principal
from coldchain.models.authorized_handler import AuthorizedHandler
from coldchain.models.registry_state import REGISTRY_STATE_ID, RegistryState

logger = logging.getLogger(__name__)


async def ensure_registry_initialized(
    db: AsyncSession, owner: Principal,
) -> RegistryState:
    """Create the registry_state row if missing. Returns the effective state."""
    state = await db.get(RegistryState, REGISTRY_STATE_ID)
    if state is not None:
        if state.owner != owner:
            logger.warning(
                f"Configured owner {owner!r} ignored; registry owned by {state.owner!r}",
            )
        return state

    state = RegistryState(
        id=REGISTRY_STATE_ID, owner=owner, next_log_sequence=FIRST_LOG_SEQUENCE,
    )
    db.add(state)
    db.add(AuthorizedHandler(principal=owner, authorized=True))
    await db.commit()
    logger.info("Shipment registry initialized", extra={"principal": owner})
    return state
