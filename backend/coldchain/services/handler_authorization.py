"""Handler Authorization — owner-managed grant/revoke over the authorization set.

Invariants:
    - Only the registry owner (fixed at bootstrap) may grant or revoke
    - revoke removes the entry entirely; absent == not authorized
    - is_authorized is read-only and never raises for unknown principals
"""

import logging

from coldchain.core.domain_types import Principal
from coldchain.core.enforce_lifecycle import check_is_owner
from coldchain.core.shipment_state import CallContext
from coldchain.services.registry_service import RegistryService

logger = logging.getLogger(__name__)


class HandlerAuthorization(RegistryService):
    """grant-handler, revoke-handler, is-authorized-handler."""

    async def grant(self, ctx: CallContext, principal: Principal) -> None:
        async with self.transaction(ctx) as (store, ctx):
            error = check_is_owner(ctx.caller, await store.get_owner(), "grant handlers")
            if error:
                raise error
            await store.set_authorized(principal)
        logger.info(
            f"Handler {principal} authorized",
            extra={"principal": ctx.caller},
        )

    async def revoke(self, ctx: CallContext, principal: Principal) -> bool:
        """Returns whether an entry was removed."""
        async with self.transaction(ctx) as (store, ctx):
            error = check_is_owner(ctx.caller, await store.get_owner(), "revoke handlers")
            if error:
                raise error
            removed = await store.remove_authorized(principal)
        logger.info(
            f"Handler {principal} revoked",
            extra={"principal": ctx.caller},
        )
        return removed

    async def is_authorized(self, principal: Principal) -> bool:
        return await self.store.is_authorized(principal)

    async def get_owner(self) -> Principal:
        return await self.store.get_owner()
