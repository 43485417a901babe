"""Lifecycle Enforcement — validates every precondition before a shipment mutation.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return a ColdChainError on violation, None on success (shell raises it)
    - validate_* functions chain checks in the documented order — first error wins
    - Authorization lookups arrive as explicit booleans (default-deny resolved by shell)

Design Decisions:
    - Return errors instead of raising: the shell decides when to raise, so every
      check runs before any write and tests assert on values without pytest.raises
    - NotFound is checked by the shell (it owns the lookup); checks here start
      from an existing record
"""

from coldchain.core.domain_types import Principal
from coldchain.core.errors import (
    AlreadyCompletedError,
    ColdChainError,
    ErrorContext,
    InvalidRangeError,
    InvalidTemperatureError,
    NotAuthorizedError,
)
from coldchain.core.shipment_state import ShipmentRecord


def check_range(min_temp: int, max_temp: int) -> ColdChainError | None:
    if min_temp > max_temp:
        return InvalidRangeError(min_temp, max_temp)
    return None


def check_initial_temperature(
    temperature: int, min_temp: int, max_temp: int,
) -> ColdChainError | None:
    if not min_temp <= temperature <= max_temp:
        return InvalidTemperatureError(temperature, min_temp, max_temp)
    return None


def check_not_completed(record: ShipmentRecord) -> ColdChainError | None:
    """Honors the delivery marker, not just the current status."""
    if record.is_completed:
        return AlreadyCompletedError(
            record.shipment_id, ErrorContext(shipment_id=record.shipment_id),
        )
    return None


def check_is_current_handler(
    record: ShipmentRecord, caller: Principal, operation: str,
) -> ColdChainError | None:
    if caller != record.current_handler:
        return NotAuthorizedError(
            caller, operation,
            ErrorContext(shipment_id=record.shipment_id, principal=caller),
        )
    return None


def check_is_destination(
    record: ShipmentRecord, caller: Principal,
) -> ColdChainError | None:
    if caller != record.destination:
        return NotAuthorizedError(
            caller, "complete delivery",
            ErrorContext(shipment_id=record.shipment_id, principal=caller),
        )
    return None


def check_handler_or_authorized(
    record: ShipmentRecord, caller: Principal, caller_authorized: bool, operation: str,
) -> ColdChainError | None:
    """Current handler, or a principal in the authorization set."""
    if caller == record.current_handler or caller_authorized:
        return None
    return NotAuthorizedError(
        caller, operation,
        ErrorContext(shipment_id=record.shipment_id, principal=caller),
    )


def check_is_owner(
    caller: Principal, owner: Principal, operation: str,
) -> ColdChainError | None:
    if caller != owner:
        return NotAuthorizedError(caller, operation, ErrorContext(principal=caller))
    return None


# ─── Chained validators (one per mutating operation) ────────────

def validate_creation(
    min_temp: int, max_temp: int, initial_temp: int,
) -> ColdChainError | None:
    """AlreadyExists is resolved by the shell before this runs."""
    return (
        check_range(min_temp, max_temp)
        or check_initial_temperature(initial_temp, min_temp, max_temp)
    )


def validate_transfer(
    record: ShipmentRecord, caller: Principal,
) -> ColdChainError | None:
    return (
        check_is_current_handler(record, caller, "transfer custody")
        or check_not_completed(record)
    )


def validate_completion(
    record: ShipmentRecord, caller: Principal,
) -> ColdChainError | None:
    return (
        check_is_destination(record, caller)
        or check_not_completed(record)
    )


def validate_emergency(
    record: ShipmentRecord, caller: Principal, caller_authorized: bool,
) -> ColdChainError | None:
    # Completed shipments are not guarded: post-delivery emergencies are accepted.
    return check_handler_or_authorized(
        record, caller, caller_authorized, "report an emergency",
    )


def validate_reading(
    record: ShipmentRecord, caller: Principal, caller_authorized: bool,
) -> ColdChainError | None:
    return (
        check_handler_or_authorized(
            record, caller, caller_authorized, "log temperature",
        )
        or check_not_completed(record)
    )
