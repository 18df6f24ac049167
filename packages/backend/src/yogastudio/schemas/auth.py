"""Pydantic schemas for login and registration.

Wire names are camelCase (firstName, lastName) to match the web client;
Python attributes stay snake_case through field aliases.
"""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    email: EmailStr = Field(..., max_length=50)
    first_name: str = Field(..., alias="firstName", min_length=3, max_length=20)
    last_name: str = Field(..., alias="lastName", min_length=3, max_length=20)
    password: str = Field(..., min_length=6, max_length=40)

    model_config = {"populate_by_name": True}


class JwtResponse(BaseModel):
    token: str
    type: str = "Bearer"
    id: int
    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    admin: bool

    model_config = {"populate_by_name": True}


class MessageResponse(BaseModel):
    message: str
