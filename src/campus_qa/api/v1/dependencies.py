"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from campus_qa.core.settings import settings
from campus_qa.db.session import get_db
from campus_qa.models import Profile
from campus_qa.services.errors import ForbiddenError, UnauthorizedError
from campus_qa.services.lifecycle import get_auto_approve
from campus_qa.services.profiles import get_or_create_profile

# Anonymous requests are allowed through; endpoints that need a caller
# depend on get_current_profile which rejects them.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]

INVALID_CREDENTIALS = "Could not validate credentials"


def decode_identity_token(token: str) -> dict[str, Any]:
    """Verify an identity provider token and return its claims.

    Raises:
        UnauthorizedError: If the signature, expiry or audience is invalid.
    """
    options = {"verify_aud": settings.auth_jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
            options=options,
        )
    except JWTError as err:
        raise UnauthorizedError(INVALID_CREDENTIALS) from err


def _profile_from_token(token: str, db: Session) -> Profile:
    payload = decode_identity_token(token)
    subject = payload.get("sub")
    if not subject:
        raise UnauthorizedError(INVALID_CREDENTIALS)

    email = payload.get("email")
    domain = settings.allowed_email_domain
    if domain and not (isinstance(email, str) and email.lower().endswith(f"@{domain.lower()}")):
        raise ForbiddenError(f"Only @{domain} accounts can use this forum")

    return get_or_create_profile(db, str(subject), email)


def get_optional_profile(credentials: CredentialsDep, db: SessionDep) -> Profile | None:
    """Return the caller's profile, or None for anonymous readers."""
    if credentials is None:
        return None
    return _profile_from_token(credentials.credentials, db)


def get_current_profile(credentials: CredentialsDep, db: SessionDep) -> Profile:
    """Return the caller's profile, creating it on first sight.

    Raises:
        UnauthorizedError: If no bearer token is present or it is invalid.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    return _profile_from_token(credentials.credentials, db)


def get_auto_approve_flag(db: SessionDep) -> bool:
    """Read the auto-approve flag once for the current request."""
    return get_auto_approve(db)


# Type aliases for caller dependencies
CurrentProfileDep = Annotated[Profile, Depends(get_current_profile)]
OptionalProfileDep = Annotated[Profile | None, Depends(get_optional_profile)]
AutoApproveDep = Annotated[bool, Depends(get_auto_approve_flag)]
