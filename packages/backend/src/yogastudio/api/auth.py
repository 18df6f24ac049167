"""Auth API — registration and login.

- POST /auth/register → create a user account
- POST /auth/login → email/password → JWT bearer token

Both routes are open. Login failures are answered with the standard 401
entry-point body.
"""

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.auth.jwt import issue_token
from yogastudio.auth.password import verify_password
from yogastudio.auth.principal import Principal
from yogastudio.db.engine import get_db
from yogastudio.errors import BadRequestError, UnauthorizedError
from yogastudio.schemas.auth import (
    JwtResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
)
from yogastudio.schemas.convert import principal_to_jwt_response
from yogastudio.services.user_service import UserService

logger = structlog.get_logger()

router = APIRouter(prefix="/auth")

BAD_CREDENTIALS = "Bad credentials"


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=JwtResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login with email and password → JWT token plus profile."""
    user = await UserService(db).find_by_email(body.email)

    if not user or not verify_password(body.password, user.password_hash):
        logger.info("auth.login_failed", email=body.email)
        raise UnauthorizedError(BAD_CREDENTIALS)

    principal = Principal.from_user(user)
    token = issue_token(principal)
    logger.info("auth.login", user_id=principal.id)
    return principal_to_jwt_response(principal, token)


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=MessageResponse)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create a new user account."""
    try:
        await UserService(db).register(
            email=body.email,
            password=body.password,
            first_name=body.first_name,
            last_name=body.last_name,
        )
    except BadRequestError as e:
        return JSONResponse(status_code=400, content={"message": str(e)})
    return MessageResponse(message="User registered successfully!")
