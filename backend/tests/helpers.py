# tests/helpers.py

from teamtasks.core.auth import create_access_token
from teamtasks.models import User


def auth(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


def error_message(response) -> str:
    return response.json()["message"]
