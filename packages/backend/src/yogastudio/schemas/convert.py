"""Entity → wire conversions.

Plain functions, one per entity. A missing entity converts to None.
"""

from typing import Optional

from yogastudio.auth.principal import Principal
from yogastudio.db.models import Session, Teacher, User
from yogastudio.schemas.auth import JwtResponse
from yogastudio.schemas.session import SessionRead, TeacherRead, UserRead


def session_to_read(session: Optional[Session]) -> Optional[SessionRead]:
    if session is None:
        return None
    return SessionRead(
        id=session.id,
        name=session.name,
        date=session.date,
        teacher_id=session.teacher_id,
        description=session.description,
        users=session.user_ids,
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


def teacher_to_read(teacher: Optional[Teacher]) -> Optional[TeacherRead]:
    if teacher is None:
        return None
    return TeacherRead(
        id=teacher.id,
        last_name=teacher.last_name,
        first_name=teacher.first_name,
        created_at=teacher.created_at,
        updated_at=teacher.updated_at,
    )


def user_to_read(user: Optional[User]) -> Optional[UserRead]:
    if user is None:
        return None
    return UserRead(
        id=user.id,
        email=user.email,
        last_name=user.last_name,
        first_name=user.first_name,
        admin=bool(user.admin),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def principal_to_jwt_response(principal: Principal, token: str) -> JwtResponse:
    return JwtResponse(
        token=token,
        id=principal.id,
        username=principal.username,
        first_name=principal.first_name,
        last_name=principal.last_name,
        admin=principal.is_admin,
    )
