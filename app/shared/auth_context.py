# -*- coding: utf-8 -*-
"""
backend/app/shared/auth_context.py

Contexto de autenticación: quién ejecuta la acción.

- Actor: identidad + roles globales (ESTUDIANTE, DOCENTE, MESA_PARTES, ADMIN)
- oauth2_scheme / get_current_actor: dependencia FastAPI que decodifica el
  JWT emitido por el servicio de autenticación institucional
- create_access_token: emisión de tokens para tests y herramientas locales

La pertenencia contextual (autor, asesor, jurado de una tesis concreta) NO
vive aquí: la resuelve el dominio con los participantes de la tesis.

Fecha: 2026-02-03
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, FrozenSet, Iterable, Optional, Union
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from app.shared.config import get_settings

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


@dataclass(frozen=True)
class Actor:
    """Usuario autenticado que ejecuta una operación."""
    user_id: UUID
    roles: FrozenSet[str] = field(default_factory=frozenset)
    email: Optional[str] = None

    def has_role(self, role: Any) -> bool:
        return str(getattr(role, "value", role)) in self.roles

    @classmethod
    def of(cls, user_id: Union[UUID, str], roles: Iterable[Any] = (), email: Optional[str] = None) -> "Actor":
        return cls(
            user_id=user_id if isinstance(user_id, UUID) else UUID(str(user_id)),
            roles=frozenset(str(getattr(r, "value", r)) for r in roles),
            email=email,
        )


class TokenDecodeError(Exception):
    """Error al decodificar/validar un token JWT."""


def create_access_token(
    subject: Union[str, UUID],
    roles: Iterable[Any] = (),
    expires_delta: Optional[timedelta] = None,
    **extra: Any,
) -> str:
    """
    Crea un JWT con claims 'sub' (UUID del usuario) y 'roles'.
    """
    settings = get_settings()
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode: Dict[str, Any] = {
        "sub": str(subject),
        "roles": [str(getattr(r, "value", r)) for r in roles],
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    if extra:
        to_encode.update(extra)
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida un JWT. Lanza TokenDecodeError si es inválido/expirado.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        raise TokenDecodeError("Token inválido o expirado") from e

    sub = payload.get("sub")
    if sub is None or not str(sub).strip():
        raise TokenDecodeError("Token sin 'sub'")
    return payload


def actor_from_claims(payload: Dict[str, Any]) -> Actor:
    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    try:
        return Actor.of(payload["sub"], roles, email=payload.get("email"))
    except (KeyError, ValueError) as e:
        raise TokenDecodeError("Identificador de usuario inválido en el token") from e


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": "invalid_token", "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_actor(token: Optional[str] = Depends(oauth2_scheme)) -> Actor:
    """
    Dependencia FastAPI: Actor autenticado a partir de Authorization: Bearer.

    Raises:
        HTTPException 401: token ausente, inválido o expirado.
    """
    if not token:
        raise _unauthorized("Not authenticated")
    try:
        return actor_from_claims(decode_access_token(token))
    except TokenDecodeError as e:
        logger.info("auth_rejected reason=%s", e)
        raise _unauthorized(str(e)) from e


__all__ = [
    "Actor",
    "TokenDecodeError",
    "oauth2_scheme",
    "create_access_token",
    "decode_access_token",
    "actor_from_claims",
    "get_current_actor",
]

# Fin del archivo backend/app/shared/auth_context.py
