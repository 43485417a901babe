"""Request Dependencies — caller principal and requested logical timestamp for mutating routes.

Invariants:
    - X-Principal is treated as already authenticated by the hosting environment
    - X-Principal is stripped; a blank principal is rejected like a missing one
    - X-Logical-Timestamp is only a request: the write path clamps it to the
      process clock under the registry lock (services/registry_service.py)

Design Decisions:
    - Explicit CallContext dependency instead of request-global state: services
      receive caller and time as parameters
"""

from fastapi import Header
from fastapi.exceptions import RequestValidationError

from coldchain.core.domain_types import (
    LogicalTimestamp,
    MAX_PRINCIPAL_LENGTH,
    Principal,
)
from coldchain.core.shipment_state import CallContext


async def get_call_context(
    x_principal: str = Header(min_length=1, max_length=MAX_PRINCIPAL_LENGTH),
    x_logical_timestamp: int | None = Header(None, ge=0),
) -> CallContext:
    caller = x_principal.strip()
    if not caller:
        raise RequestValidationError([{
            "type": "value_error",
            "loc": ("header", "x-principal"),
            "msg": "principal cannot be empty or whitespace",
            "input": x_principal,
        }])
    timestamp = (
        LogicalTimestamp(x_logical_timestamp)
        if x_logical_timestamp is not None
        else None
    )
    return CallContext(caller=Principal(caller), timestamp=timestamp)
