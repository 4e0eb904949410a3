from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from korelium.modules.admins.models import LocalAdmin


class LocalAdminRepository:
    """Repository for LocalAdmin entity."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, admin_id: int) -> Optional[LocalAdmin]:
        return self.db.get(LocalAdmin, admin_id)

    def get_by_email(self, email: str) -> Optional[LocalAdmin]:
        return self.db.execute(
            select(LocalAdmin).where(LocalAdmin.email == email)
        ).scalar_one_or_none()

    def create(self, name: str, email: str, password_hash: str, role: str) -> LocalAdmin:
        admin = LocalAdmin(name=name, email=email, password_hash=password_hash, role=role)
        self.db.add(admin)
        self.db.flush()  # flush to get the ID without committing
        return admin
