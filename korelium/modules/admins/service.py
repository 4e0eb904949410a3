from __future__ import annotations

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from korelium.core.logging import get_logger
from korelium.core.permissions import ROLES
from korelium.core.security import create_access_token, get_password_hash, verify_password
from korelium.modules.admins.models import LocalAdmin
from korelium.modules.admins.repository import LocalAdminRepository

logger = get_logger(__name__)


class AdminAuthService:
    """Login and account creation for local admins."""

    def __init__(self, db: Session):
        self.db = db
        self.admin_repo = LocalAdminRepository(db)

    def create_admin(self, name: str, email: str, password: str, role: str) -> LocalAdmin:
        if role not in ROLES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown role '{role}'. Must be one of: {', '.join(ROLES)}",
            )
        email = email.lower()
        if self.admin_repo.get_by_email(email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User already exists",
            )

        try:
            admin = self.admin_repo.create(
                name=name,
                email=email,
                password_hash=get_password_hash(password),
                role=role,
            )
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User already exists",
            )
        self.db.refresh(admin)

        logger.info("local admin created", admin_id=admin.id, role=admin.role)
        return admin

    def authenticate(self, email: str, password: str) -> LocalAdmin | None:
        admin = self.admin_repo.get_by_email(email.lower())
        if not admin:
            return None
        if not verify_password(password, admin.password_hash):
            return None
        return admin

    def login(self, email: str, password: str) -> tuple[LocalAdmin, str]:
        """Return the admin and a signed access token."""
        admin = self.authenticate(email, password)
        if not admin:
            logger.info("admin login failed", email=email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        token = create_access_token(
            subject=str(admin.id),
            extra_claims={"email": admin.email, "role": admin.role},
        )
        logger.info("admin logged in", admin_id=admin.id, role=admin.role)
        return admin, token
