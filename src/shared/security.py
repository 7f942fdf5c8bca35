"""Bearer-token authentication and password hashing.

Tokens are HS256 JWTs signed with the shared secret, carrying the customer id
(``sub``), email, display name and roles. Every service validates signature,
issuer, audience and expiry (with a small clock-skew allowance) before
trusting the claims.
"""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from shared.config import get_settings

logger = structlog.get_logger(__name__)

# Security scheme for bearer tokens
security = HTTPBearer(auto_error=False)

SERVICE_ROLE = "service"

_pwd_context: CryptContext | None = None


def _password_context() -> CryptContext:
    global _pwd_context
    if _pwd_context is None:
        _pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=get_settings().password_hash_rounds,
        )
    return _pwd_context


def hash_password(password: str) -> str:
    return _password_context().hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return _password_context().verify(password, password_hash)


class TokenError(Exception):
    """Raised when a bearer token cannot be trusted."""


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


class TokenUser(BaseModel):
    """User data extracted from a validated token."""

    id: str
    email: str
    name: Optional[str] = None
    roles: list[str] = []

    def has_role(self, role: str) -> bool:
        return role in self.roles


def create_access_token(user_id: str, email: str, full_name: str | None = None, roles=()) -> IssuedToken:
    settings = get_settings()
    now = datetime.now(UTC)
    expires_at = now + timedelta(minutes=settings.jwt_expire_minutes)

    claims = {
        "sub": str(user_id),
        "email": email,
        "name": full_name,
        "roles": list(roles),
        "jti": str(uuid.uuid4()),
        "iat": now,
        "nbf": now,
        "exp": expires_at,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    token = jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return IssuedToken(token=token, expires_at=expires_at)


def issue_service_token(service_name: str) -> IssuedToken:
    """Token a service presents when calling another service."""
    return create_access_token(
        user_id=str(uuid.uuid5(uuid.NAMESPACE_DNS, service_name)),
        email=f"{service_name}@services.local",
        full_name=service_name,
        roles=[SERVICE_ROLE],
    )


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={
                "leeway": settings.jwt_clock_skew_seconds,
                "require_exp": True,
                "require_sub": True,
            },
        )
    except JWTError as exc:
        raise TokenError(str(exc)) from exc


def user_from_claims(claims: dict) -> TokenUser | None:
    """Build the token user, or ``None`` when the subject is not a UUID or the email is missing."""
    subject = claims.get("sub")
    email = claims.get("email")
    if not subject or not email:
        return None
    try:
        uuid.UUID(str(subject))
    except ValueError:
        return None
    return TokenUser(id=str(subject), email=email, name=claims.get("name"), roles=list(claims.get("roles") or []))


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenUser:
    """Dependency that extracts and validates the current user from the bearer token."""
    if not credentials:
        raise _unauthorized("Authentication required")

    try:
        claims = decode_access_token(credentials.credentials)
    except TokenError as exc:
        logger.info("Rejected bearer token", reason=str(exc))
        if "expired" in str(exc).lower():
            raise _unauthorized("Token has expired") from exc
        raise _unauthorized("Invalid token") from exc

    user = user_from_claims(claims)
    if user is None:
        raise _unauthorized("Invalid token payload: missing user id or email")
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenUser]:
    """Like ``get_current_user`` but anonymous callers get ``None``."""
    if not credentials:
        return None
    try:
        return await get_current_user(credentials)
    except HTTPException:
        return None


def require_roles(*roles: str):
    """Dependency factory allowing only users holding at least one of ``roles``."""

    async def _check(user: TokenUser = Depends(get_current_user)) -> TokenUser:
        if not any(user.has_role(role) for role in roles):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user

    return _check
