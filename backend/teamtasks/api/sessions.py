# backend/teamtasks/api/sessions.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.database import get_db
from teamtasks.schemas.session import Session, SessionCreate
from teamtasks.services import users_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=Session)
async def create_session(payload: SessionCreate, db: AsyncSession = Depends(get_db)):
    user, token = await users_service.authenticate(db, payload.email, payload.password)
    return {"token": token, "token_type": "bearer", "user": user}
