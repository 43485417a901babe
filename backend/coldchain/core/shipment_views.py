"""Shipment Views — pure read projections for the query surface.

Invariants:
    - Inputs are ShipmentRecord values (no IO, no DB)
    - Returns flat dicts (serializable as JSON); never mutates the record
    - Assessment band is derived on every call, never stored
"""

from coldchain.core.quality_scoring import assess_quality
from coldchain.core.shipment_state import (
    EmergencyReport,
    ShipmentRecord,
    TemperatureLogEntry,
)


def shipment_status_view(record: ShipmentRecord) -> dict:
    return {
        "shipment_id": record.shipment_id,
        "status": record.status.value,
        "current_handler": record.current_handler,
        "current_temp": record.current_temp,
        "quality_score": record.quality_score,
        "last_updated": record.updated_at,
    }


def quality_assessment_view(record: ShipmentRecord) -> dict:
    return {
        "shipment_id": record.shipment_id,
        "quality_score": record.quality_score,
        "breach_count": record.breach_count,
        "status": record.status.value,
        "assessment": assess_quality(record.quality_score).value,
    }


def compliance_view(record: ShipmentRecord) -> dict:
    return {
        "shipment_id": record.shipment_id,
        "compliant": record.is_temperature_compliant,
        "current_temp": record.current_temp,
        "min_temp": record.min_temp,
        "max_temp": record.max_temp,
    }


def shipment_view(record: ShipmentRecord) -> dict:
    return {
        "shipment_id": record.shipment_id,
        "origin": record.origin,
        "destination": record.destination,
        "current_handler": record.current_handler,
        "product_type": record.product_type,
        "min_temp": record.min_temp,
        "max_temp": record.max_temp,
        "current_temp": record.current_temp,
        "status": record.status.value,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
        "breach_count": record.breach_count,
        "quality_score": record.quality_score,
        "completed_at": record.completed_at,
    }


def log_entry_view(entry: TemperatureLogEntry) -> dict:
    return {
        "shipment_id": entry.shipment_id,
        "sequence": entry.sequence,
        "temperature": entry.temperature,
        "timestamp": entry.timestamp,
        "location": entry.location,
        "handler": entry.handler,
        "sensor_id": entry.sensor_id,
    }


def emergency_report_view(report: EmergencyReport) -> dict:
    return {
        "shipment_id": report.shipment_id,
        "emergency_type": report.emergency_type,
        "description": report.description,
        "reporter": report.reporter,
        "reported_at": report.reported_at,
        "previous_status": report.previous_status.value,
    }
