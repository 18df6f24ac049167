"""Session service — class sessions and who participates in them.

Participation is a two-state machine per (session, user):

    NotParticipating --participate--> Participating
    Participating --no_longer_participate--> NotParticipating

Neither transition is idempotent: joining twice or leaving twice is a
BadRequestError. participate checks that both the session and the user
exist; no_longer_participate only checks the session, then whether the
user is in the participant list.

There is no application-level locking. Two concurrent joins by the same
user race at the database, where the unique (session_id, user_id)
constraint lets exactly one commit; the loser gets "already participating".
"""

from datetime import datetime
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.db.models import Participation, Session, Teacher, User
from yogastudio.errors import BadRequestError, NotFoundError

logger = structlog.get_logger()

ALREADY_PARTICIPATING = "User already participates in this session"
NOT_PARTICIPATING = "User does not participate in this session"


class SessionService:
    """Business logic for sessions and participation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Queries ─────────────────────────────────────────

    async def find_all(self) -> list[Session]:
        result = await self.db.execute(select(Session).order_by(Session.id))
        return list(result.scalars().all())

    async def get_by_id(self, session_id: int) -> Optional[Session]:
        return await self.db.get(Session, session_id)

    async def _require(self, session_id: int) -> Session:
        session = await self.get_by_id(session_id)
        if session is None:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    # ─── CRUD ────────────────────────────────────────────

    async def create(
        self,
        *,
        name: str,
        description: str,
        date: datetime,
        teacher_id: Optional[int],
        user_ids: Optional[list[int]] = None,
    ) -> Session:
        await self._check_teacher(teacher_id)
        session = Session(
            name=name,
            description=description,
            date=date,
            teacher_id=teacher_id,
        )
        session.participations = await self._participations_for(session, user_ids or [])
        self.db.add(session)
        await self.db.commit()
        logger.info("session.created", session_id=session.id)
        return session

    async def update(
        self,
        session_id: int,
        *,
        name: str,
        description: str,
        date: datetime,
        teacher_id: Optional[int],
        user_ids: Optional[list[int]] = None,
    ) -> Session:
        """Overwrite a session's fields and participant list."""
        session = await self._require(session_id)
        await self._check_teacher(teacher_id)

        session.name = name
        session.description = description
        session.date = date
        session.teacher_id = teacher_id
        session.participations = await self._participations_for(session, user_ids or [])

        await self.db.commit()
        # Reused rows keep their ids; reload so the list reads in stored order
        await self.db.refresh(session, ["participations"])
        logger.info("session.updated", session_id=session.id)
        return session

    async def delete(self, session_id: int) -> None:
        session = await self._require(session_id)
        await self.db.delete(session)
        await self.db.commit()
        logger.info("session.deleted", session_id=session_id)

    # ─── Participation ───────────────────────────────────

    async def participate(self, session_id: int, user_id: int) -> Session:
        """Enroll a user in a session.

        Raises NotFoundError if the session or the user is missing, and
        BadRequestError if the user already participates.
        """
        session = await self._require(session_id)
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        if user_id in session.user_ids:
            raise BadRequestError(ALREADY_PARTICIPATING)

        session.participations.append(Participation(user_id=user_id))
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(
                "session.participate_conflict",
                session_id=session_id,
                user_id=user_id,
            )
            raise BadRequestError(ALREADY_PARTICIPATING)

        logger.info("session.participant_added", session_id=session_id, user_id=user_id)
        return session

    async def no_longer_participate(self, session_id: int, user_id: int) -> Session:
        """Remove a user from a session.

        Raises NotFoundError if the session is missing and BadRequestError
        if the user is not in its participant list. The user row itself is
        not looked up.
        """
        session = await self._require(session_id)

        if user_id not in session.user_ids:
            raise BadRequestError(NOT_PARTICIPATING)

        session.participations = [
            p for p in session.participations if p.user_id != user_id
        ]
        await self.db.commit()

        logger.info("session.participant_removed", session_id=session_id, user_id=user_id)
        return session

    # ─── Helpers ─────────────────────────────────────────

    async def _check_teacher(self, teacher_id: Optional[int]) -> None:
        if teacher_id is None:
            return
        if await self.db.get(Teacher, teacher_id) is None:
            raise NotFoundError(f"Teacher {teacher_id} not found")

    async def _participations_for(
        self, session: Session, user_ids: list[int]
    ) -> list[Participation]:
        """Build the participation rows for an explicit user id list.

        Duplicates are dropped (first occurrence wins) and existing rows
        are reused so their join order is kept.
        """
        ordered = list(dict.fromkeys(user_ids))
        if ordered:
            result = await self.db.execute(select(User.id).where(User.id.in_(ordered)))
            known = set(result.scalars().all())
            missing = [uid for uid in ordered if uid not in known]
            if missing:
                raise NotFoundError(f"Users not found: {missing}")

        existing = {p.user_id: p for p in session.participations}
        return [existing.get(uid) or Participation(user_id=uid) for uid in ordered]
