import uuid

from teamtasks.core.logger import logger


def generate_request_id() -> str:
    return str(uuid.uuid4())


def log_user_action(user_id, action: str, **detail):
    """Log a state change performed by an authenticated caller."""
    logger.info(action, extra={"user_id": str(user_id), **detail})
