"""User model definitions."""

from enum import Enum

from pydantic import BaseModel


class Role(str, Enum):
    TEACHER = "teacher"
    STUDENT = "student"


class User(BaseModel):
    """Represents an application user."""
    id: int
    email: str
    role: Role
    hashed_password: str


class Identity(BaseModel):
    """The caller resolved from a verified access token."""
    id: int
    role: Role
    email: str

    @property
    def is_teacher(self) -> bool:
        return self.role is Role.TEACHER
