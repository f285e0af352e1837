"""FastAPI dependency — JWT auth middleware."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenException, UnauthorizedException
from app.infrastructure.database import get_db
from app.application.services.auth_service import decode_access_token, get_user_by_email
from app.domain.models.user import User

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Extract and validate the current user from JWT token."""
    if credentials is None:
        raise UnauthorizedException("Token de acesso não informado")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedException("Token inválido ou expirado")

    email = payload.get("sub")
    if email is None:
        raise UnauthorizedException("Token inválido")

    user = get_user_by_email(db, email)
    if user is None or not user.is_active:
        raise UnauthorizedException("Usuário não encontrado ou inativo", details={"email": email})

    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Only admins may change the catalog or its upload history."""
    if not user.is_admin:
        raise ForbiddenException(
            "Permissão negada: requer privilégios de administrador",
            details={"role": user.role},
        )
    return user
