"""Shipment Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Identifiers and free-text fields bounded by core/domain_types.py limits
    - Temperatures are signed integers; range logic stays in core (InvalidRange/InvalidTemperature)
    - Strings are stripped and must be non-empty (emergency description may be empty)

Design Decisions:
    - Range checks NOT duplicated as validators: the domain errors carry the
      contract's codes, a 422-style validation error would not
"""

from pydantic import BaseModel, Field, field_validator

from coldchain.core.domain_types import (
    MAX_DESCRIPTION_LENGTH,
    MAX_EMERGENCY_TYPE_LENGTH,
    MAX_LOCATION_LENGTH,
    MAX_PRINCIPAL_LENGTH,
    MAX_PRODUCT_TYPE_LENGTH,
    MAX_SENSOR_ID_LENGTH,
    MAX_SHIPMENT_ID_LENGTH,
)


def _strip_non_empty(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("value cannot be empty or whitespace")
    return v


class ShipmentCreate(BaseModel):
    """create-shipment request."""
    shipment_id: str = Field(min_length=1, max_length=MAX_SHIPMENT_ID_LENGTH)
    destination: str = Field(min_length=1, max_length=MAX_PRINCIPAL_LENGTH)
    product_type: str = Field(min_length=1, max_length=MAX_PRODUCT_TYPE_LENGTH)
    min_temp: int
    max_temp: int
    initial_temp: int

    @field_validator("shipment_id", "destination", "product_type")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_non_empty(v)


class CustodyTransfer(BaseModel):
    new_handler: str = Field(min_length=1, max_length=MAX_PRINCIPAL_LENGTH)

    @field_validator("new_handler")
    @classmethod
    def strip_handler(cls, v: str) -> str:
        return _strip_non_empty(v)


class TemperatureReading(BaseModel):
    temperature: int
    location: str = Field(min_length=1, max_length=MAX_LOCATION_LENGTH)
    sensor_id: str = Field(min_length=1, max_length=MAX_SENSOR_ID_LENGTH)

    @field_validator("location", "sensor_id")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_non_empty(v)


class EmergencyReportCreate(BaseModel):
    emergency_type: str = Field(min_length=1, max_length=MAX_EMERGENCY_TYPE_LENGTH)
    description: str = Field(max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("emergency_type")
    @classmethod
    def strip_type(cls, v: str) -> str:
        return _strip_non_empty(v)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()


class ShipmentResponse(BaseModel):
    """Full shipment record."""
    shipment_id: str
    origin: str
    destination: str
    current_handler: str
    product_type: str
    min_temp: int
    max_temp: int
    current_temp: int
    status: str
    created_at: int
    updated_at: int
    breach_count: int
    quality_score: int
    completed_at: int | None = None


class ShipmentStatusResponse(BaseModel):
    shipment_id: str
    status: str
    current_handler: str
    current_temp: int
    quality_score: int
    last_updated: int


class QualityAssessmentResponse(BaseModel):
    shipment_id: str
    quality_score: int
    breach_count: int
    status: str
    assessment: str


class ComplianceResponse(BaseModel):
    shipment_id: str
    compliant: bool
    current_temp: int
    min_temp: int
    max_temp: int


class TemperatureLogResponse(BaseModel):
    shipment_id: str
    sequence: int
    temperature: int
    timestamp: int
    location: str
    handler: str
    sensor_id: str


class EmergencyReportResponse(BaseModel):
    shipment_id: str
    emergency_type: str
    description: str
    reporter: str
    reported_at: int
    previous_status: str
