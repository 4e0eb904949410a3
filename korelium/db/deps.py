from __future__ import annotations

from collections.abc import Callable, Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from korelium.core.permissions import has_any_permission
from korelium.core.security import decode_access_token
from korelium.db.session import SessionLocal
from korelium.modules.admins.models import LocalAdmin


# ---------- DB DEPENDENCY ----------


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ---------- AUTH DEPENDENCIES ----------

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/admin/login")


def get_current_admin(
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> LocalAdmin:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    try:
        payload = decode_access_token(token)
        sub = payload.get("sub")
        if sub is None:
            raise credentials_exception
        admin_id = int(sub)
    except (JWTError, ValueError):
        raise credentials_exception

    admin = db.get(LocalAdmin, admin_id)
    if admin is None:
        raise credentials_exception

    return admin


def require_permission(*actions: str) -> Callable[..., LocalAdmin]:
    """Dependency factory: the current admin's role must grant one of `actions`."""

    def checker(admin: LocalAdmin = Depends(get_current_admin)) -> LocalAdmin:
        if not admin.role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Role not found for user",
            )
        if not has_any_permission(admin.role, *actions):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied: insufficient permissions",
            )
        return admin

    return checker
