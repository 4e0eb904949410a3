from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from korelium.db.base import Base
from korelium.db.mixins import TimestampMixin


class LocalAdmin(TimestampMixin, Base):
    __tablename__ = "local_admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # one of korelium.core.permissions.ROLES
    role: Mapped[str] = mapped_column(String(50), nullable=False)
