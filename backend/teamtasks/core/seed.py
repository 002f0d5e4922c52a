# backend/teamtasks/core/seed.py

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.auth import hash_password
from teamtasks.core.config import Settings, settings
from teamtasks.core.logger import logger
from teamtasks.models import User, Role


async def seed_admin(db: AsyncSession, config: Settings = settings):
    """Create the bootstrap admin from settings if it does not exist yet."""
    if not config.ADMIN_EMAIL or not config.ADMIN_PASSWORD:
        return None

    exists = await db.scalar(select(User).where(User.email == config.ADMIN_EMAIL))
    if exists:
        return exists

    admin = User(
        name=config.ADMIN_NAME,
        email=config.ADMIN_EMAIL,
        password_hash=hash_password(config.ADMIN_PASSWORD),
        role=Role.admin,
    )
    db.add(admin)
    await db.commit()
    await db.refresh(admin)

    logger.info("Admin account seeded", extra={"user_id": str(admin.id)})
    return admin
