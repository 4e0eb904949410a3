# korelium/modules/admins/routes.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from korelium.core.permissions import MANAGE_ADMINS
from korelium.db.deps import get_db, require_permission
from korelium.modules.admins.service import AdminAuthService
from korelium.schemas.admin import (
    AdminCreate,
    AdminCreateResponse,
    AdminRead,
    LoginRequest,
    LoginResponse,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange admin email and password for a bearer token."""
    admin, token = AdminAuthService(db).login(email=payload.email, password=payload.password)
    return LoginResponse(
        message="Local Admin login successful",
        username=admin.name,
        role=admin.role,
        token=token,
    )


@router.post(
    "",
    response_model=AdminCreateResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(MANAGE_ADMINS))],
)
def create_admin(payload: AdminCreate, db: Session = Depends(get_db)):
    """Create another local admin."""
    admin = AdminAuthService(db).create_admin(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return AdminCreateResponse(
        message="Local Admin User created successfully",
        admin=AdminRead.model_validate(admin),
    )
