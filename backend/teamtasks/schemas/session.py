from pydantic import EmailStr

from .base import APIModel
from .user import User


class SessionCreate(APIModel):
    email: EmailStr
    password: str


class Session(APIModel):
    token: str
    token_type: str = "bearer"
    user: User
