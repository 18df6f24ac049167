"""User API routes.

- GET    /user/{id} → profile
- DELETE /user/{id} → delete own account (401 for anyone else's)
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.auth.dependencies import ensure_owner, get_current_principal
from yogastudio.auth.principal import Principal
from yogastudio.db.engine import get_db
from yogastudio.errors import NotFoundError
from yogastudio.schemas.convert import user_to_read
from yogastudio.schemas.session import UserRead
from yogastudio.services.user_service import UserService

router = APIRouter(prefix="/user")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("/{id}", response_model=UserRead)
async def get_user(id: int, svc: UserService = Depends(_svc)):
    user = await svc.find_by_id(id)
    if user is None:
        raise NotFoundError(f"User {id} not found")
    return user_to_read(user)


@router.delete("/{id}")
async def delete_user(
    id: int,
    principal: Principal = Depends(get_current_principal),
    svc: UserService = Depends(_svc),
):
    """Delete the caller's own account. Existence is checked before ownership."""
    user = await svc.find_by_id(id)
    if user is None:
        raise NotFoundError(f"User {id} not found")

    ensure_owner(principal, user.id)

    await svc.delete(id)
    return Response(status_code=200)
