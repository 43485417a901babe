"""RegistryState ORM — single-row table holding the owner and the log sequence counter.

Invariants:
    - Exactly one row, id == 1, created by the registry bootstrap
    - owner is fixed at initialization and never updated
    - next_log_sequence starts at 1, increments once per appended reading, never decreases
"""

from sqlalchemy import BigInteger, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from coldchain.core.domain_types import MAX_PRINCIPAL_LENGTH
from coldchain.db.base import Base


REGISTRY_STATE_ID = 1


class RegistryState(Base):
    __tablename__ = "registry_state"
    __table_args__ = (
        CheckConstraint("next_log_sequence >= 1", name="ck_registry_state_sequence"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, default=REGISTRY_STATE_ID,
    )
    owner: Mapped[str] = mapped_column(
        String(MAX_PRINCIPAL_LENGTH), nullable=False,
    )
    next_log_sequence: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=1,
    )
