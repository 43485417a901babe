"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ShipmentId, Principal, LogSequence wrap primitives — never mix them in signatures
    - Quality score is bounded 0–100
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ShipmentId = NewType("ShipmentId", str)
Principal = NewType("Principal", str)
LogSequence = NewType("LogSequence", int)


# ─── Value Types ─────────────────────────────────────────────────

LogicalTimestamp = NewType("LogicalTimestamp", int)   # monotonic, externally supplied
QualityScore = NewType("QualityScore", int)           # 0–100


# ─── Limits & Constants ──────────────────────────────────────────

MAX_SHIPMENT_ID_LENGTH = 64
MAX_PRINCIPAL_LENGTH = 128
MAX_PRODUCT_TYPE_LENGTH = 64
MAX_LOCATION_LENGTH = 100
MAX_SENSOR_ID_LENGTH = 50
MAX_EMERGENCY_TYPE_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 500

MAX_QUALITY_SCORE: QualityScore = QualityScore(100)
MIN_QUALITY_SCORE: QualityScore = QualityScore(0)
BREACH_PENALTY = 10

FIRST_LOG_SEQUENCE: LogSequence = LogSequence(1)
# Sequences are stored as signed 64-bit integers
MAX_LOG_SEQUENCE: LogSequence = LogSequence(2**63 - 1)

# Initial reading recorded by create-shipment
ORIGIN_LOCATION = "Origin"
ORIGIN_SENSOR_ID = "INITIAL"


# ─── Enums ───────────────────────────────────────────────────────

class ShipmentStatus(str, Enum):
    """Shipment lifecycle states — maps to DB `status` column."""
    CREATED = "created"
    IN_TRANSIT = "in-transit"
    COMPLETED = "completed"
    EMERGENCY = "emergency"


class QualityBand(str, Enum):
    """Derived quality assessment. Never stored."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
