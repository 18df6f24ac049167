"""Teacher API routes (read-only)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.db.engine import get_db
from yogastudio.errors import NotFoundError
from yogastudio.schemas.convert import teacher_to_read
from yogastudio.schemas.session import TeacherRead
from yogastudio.services.teacher_service import TeacherService

router = APIRouter(prefix="/teacher")


def _svc(db: AsyncSession = Depends(get_db)) -> TeacherService:
    return TeacherService(db)


@router.get("", response_model=list[TeacherRead])
async def list_teachers(svc: TeacherService = Depends(_svc)):
    return [teacher_to_read(t) for t in await svc.find_all()]


@router.get("/{id}", response_model=TeacherRead)
async def get_teacher(id: int, svc: TeacherService = Depends(_svc)):
    teacher = await svc.find_by_id(id)
    if teacher is None:
        raise NotFoundError(f"Teacher {id} not found")
    return teacher_to_read(teacher)
