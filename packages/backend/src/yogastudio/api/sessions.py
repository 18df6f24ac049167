"""Session API routes.

- GET    /session                               → all sessions
- GET    /session/{id}                          → one session
- POST   /session                               → create
- PUT    /session/{id}                          → overwrite
- DELETE /session/{id}                          → delete
- POST   /session/{id}/participate/{user_id}    → join
- DELETE /session/{id}/participate/{user_id}    → leave

NotFoundError and BadRequestError from the service propagate to the app
exception handlers (404 / 400).
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.db.engine import get_db
from yogastudio.errors import NotFoundError
from yogastudio.schemas.convert import session_to_read
from yogastudio.schemas.session import SessionRead, SessionWrite
from yogastudio.services.session_service import SessionService

router = APIRouter(prefix="/session")


def _svc(db: AsyncSession = Depends(get_db)) -> SessionService:
    return SessionService(db)


@router.get("", response_model=list[SessionRead])
async def list_sessions(svc: SessionService = Depends(_svc)):
    return [session_to_read(s) for s in await svc.find_all()]


@router.get("/{id}", response_model=SessionRead)
async def get_session(id: int, svc: SessionService = Depends(_svc)):
    session = await svc.get_by_id(id)
    if session is None:
        raise NotFoundError(f"Session {id} not found")
    return session_to_read(session)


@router.post("", response_model=SessionRead)
async def create_session(body: SessionWrite, svc: SessionService = Depends(_svc)):
    session = await svc.create(
        name=body.name,
        description=body.description,
        date=body.date,
        teacher_id=body.teacher_id,
        user_ids=body.users,
    )
    return session_to_read(session)


@router.put("/{id}", response_model=SessionRead)
async def update_session(
    id: int,
    body: SessionWrite,
    svc: SessionService = Depends(_svc),
):
    session = await svc.update(
        id,
        name=body.name,
        description=body.description,
        date=body.date,
        teacher_id=body.teacher_id,
        user_ids=body.users,
    )
    return session_to_read(session)


@router.delete("/{id}")
async def delete_session(id: int, svc: SessionService = Depends(_svc)):
    await svc.delete(id)
    return Response(status_code=200)


# ─── Participation ──────────────────────────────────────

@router.post("/{id}/participate/{user_id}")
async def participate(id: int, user_id: int, svc: SessionService = Depends(_svc)):
    await svc.participate(id, user_id)
    return Response(status_code=200)


@router.delete("/{id}/participate/{user_id}")
async def no_longer_participate(
    id: int,
    user_id: int,
    svc: SessionService = Depends(_svc),
):
    await svc.no_longer_participate(id, user_id)
    return Response(status_code=200)
