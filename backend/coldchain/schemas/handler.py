"""Handler Schemas — authorization-set request/response models."""

from pydantic import BaseModel, Field

from coldchain.core.domain_types import MAX_PRINCIPAL_LENGTH


class HandlerGrant(BaseModel):
    principal: str = Field(min_length=1, max_length=MAX_PRINCIPAL_LENGTH)


class HandlerAuthorizationResponse(BaseModel):
    principal: str
    authorized: bool
