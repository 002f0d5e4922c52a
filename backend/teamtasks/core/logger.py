import logging
import json
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime, timezone

from teamtasks.core.config import settings

SERVICE_NAME = "teamtasks-backend"

# Attributes copied from `extra=` into the JSON line when present
EXTRA_FIELDS = (
    "request_id",
    "user_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "task_id",
    "team_id",
    "target_user_id",
    "old_status",
    "new_status",
    "traceback",
)


def json_formatter(record):
    log = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "level": record.levelname,
        "service": SERVICE_NAME,
        "message": record.getMessage(),
    }

    for field in EXTRA_FIELDS:
        if hasattr(record, field):
            log[field] = getattr(record, field)

    if record.exc_info and "traceback" not in log:
        log["traceback"] = logging.Formatter().formatException(record.exc_info)

    return json.dumps(log, default=str)


class JSONFormatter(logging.Formatter):
    def format(self, record):
        return json_formatter(record)


logger = logging.getLogger("teamtasks")
logger.setLevel(settings.LOG_LEVEL)

json_f = JSONFormatter()

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.LOG_LEVEL)
    console_handler.setFormatter(json_f)
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=5 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setLevel(settings.LOG_LEVEL)
        file_handler.setFormatter(json_f)
        logger.addHandler(file_handler)
