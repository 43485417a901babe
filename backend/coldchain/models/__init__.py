"""ORM Models — SQLAlchemy declarative models for the registry's durable state.

Invariants:
    - All models inherit from Base (db/base.py)
    - Shipment is the aggregate root; log entries and emergency reports scoped by shipment_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from coldchain.models.shipment import Shipment  # noqa: F401
from coldchain.models.temperature_log import TemperatureLog  # noqa: F401
from coldchain.models.authorized_handler import AuthorizedHandler  # noqa: F401
from coldchain.models.registry_state import RegistryState  # noqa: F401
from coldchain.models.emergency_report import EmergencyReportRow  # noqa: F401
