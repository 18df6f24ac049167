"""Pydantic schemas for sessions, teachers and users.

Separate "Write" schemas (input) from "Read" schemas (output). `users` on a
session is the ordered list of participant user ids.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ─── Sessions ───────────────────────────────────────────

class SessionWrite(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    date: datetime
    teacher_id: Optional[int] = None
    description: str = Field(..., min_length=1, max_length=2500)
    users: list[int] = Field(default_factory=list)


class SessionRead(BaseModel):
    id: int
    name: str
    date: datetime
    teacher_id: Optional[int] = None
    description: str
    users: list[int] = []
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True}


# ─── Teachers ───────────────────────────────────────────

class TeacherRead(BaseModel):
    id: int
    last_name: str = Field(..., alias="lastName")
    first_name: str = Field(..., alias="firstName")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True}


# ─── Users ──────────────────────────────────────────────

class UserRead(BaseModel):
    """A user as exposed over HTTP. Never carries the password hash."""
    id: int
    email: str
    last_name: str = Field(..., alias="lastName")
    first_name: str = Field(..., alias="firstName")
    admin: bool
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True}
