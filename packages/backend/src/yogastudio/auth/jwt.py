"""JWT bearer token issuing and validation.

Tokens are compact HMAC-signed JWTs carrying only {sub, iat, exp}, where
sub is the user's email. Nothing is persisted server-side: a token is
valid iff its signature verifies against settings.jwt_secret and the
wall clock is still before exp.

Validation never raises. Malformed, badly signed, expired and otherwise
unusable tokens all come back as False; the reason is only logged.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog

from yogastudio.auth.principal import Principal
from yogastudio.config import settings

logger = structlog.get_logger()


def issue_token(principal: Principal, expiration_ms: Optional[int] = None) -> str:
    """Create a signed token for the principal's username."""
    lifetime = settings.jwt_expiration_ms if expiration_ms is None else expiration_ms
    now = datetime.now(timezone.utc)
    payload = {
        "sub": principal.username,
        "iat": now,
        "exp": now + timedelta(milliseconds=lifetime),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def validate_token(token: str) -> bool:
    """Return True iff the signature verifies and the token has not expired."""
    try:
        jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
        return True
    except jwt.ExpiredSignatureError as e:
        logger.info("auth.token_expired", error=str(e))
    except jwt.InvalidSignatureError as e:
        logger.info("auth.token_bad_signature", error=str(e))
    except jwt.DecodeError as e:
        logger.info("auth.token_malformed", error=str(e))
    except jwt.InvalidTokenError as e:
        logger.info("auth.token_invalid", error=str(e))
    except Exception as e:
        logger.warning("auth.token_unreadable", error=str(e))
    return False


def subject_of(token: str) -> str:
    """Read the subject claim without checking signature or expiry.

    Only meaningful after validate_token(token) returned True.
    """
    payload = jwt.decode(
        token,
        options={"verify_signature": False},
        algorithms=[settings.jwt_algorithm],
    )
    return payload["sub"]
