"""Handler Routes — registry owner manages the authorization set.

Invariants:
    - POST/DELETE restricted to the registry owner (403 otherwise)
    - GET /{principal} never 404s: unknown principals are simply not authorized
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from coldchain.api.dependencies import get_call_context
from coldchain.core.domain_types import Principal
from coldchain.core.shipment_state import CallContext
from coldchain.infrastructure.database import get_db
from coldchain.schemas.handler import HandlerAuthorizationResponse, HandlerGrant
from coldchain.services.handler_authorization import HandlerAuthorization

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/handlers", tags=["handlers"])


@router.get("/owner")
async def get_registry_owner(db: AsyncSession = Depends(get_db)):
    return {"owner": await HandlerAuthorization(db).get_owner()}


@router.post(
    "", response_model=HandlerAuthorizationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def grant_handler(
    body: HandlerGrant,
    ctx: CallContext = Depends(get_call_context),
    db: AsyncSession = Depends(get_db),
):
    await HandlerAuthorization(db).grant(ctx, Principal(body.principal))
    return {"principal": body.principal, "authorized": True}


@router.delete("/{principal}", response_model=HandlerAuthorizationResponse)
async def revoke_handler(
    principal: str,
    ctx: CallContext = Depends(get_call_context),
    db: AsyncSession = Depends(get_db),
):
    await HandlerAuthorization(db).revoke(ctx, Principal(principal))
    return {"principal": principal, "authorized": False}


@router.get("/{principal}", response_model=HandlerAuthorizationResponse)
async def is_authorized_handler(
    principal: str, db: AsyncSession = Depends(get_db),
):
    authorized = await HandlerAuthorization(db).is_authorized(Principal(principal))
    return {"principal": principal, "authorized": authorized}
