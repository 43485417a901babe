"""AuthorizedHandler ORM — the Handler Authorization Set.

Invariants:
    - Absence of a row means "not authorized" (default-deny)
    - revoke deletes the row; it never stores authorized=False
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from coldchain.core.domain_types import MAX_PRINCIPAL_LENGTH
from coldchain.db.base import Base


class AuthorizedHandler(Base):
    __tablename__ = "authorized_handlers"

    principal: Mapped[str] = mapped_column(
        String(MAX_PRINCIPAL_LENGTH), primary_key=True,
    )
    authorized: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
