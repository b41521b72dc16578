import json
import logging
import sys
import traceback
from datetime import datetime, timezone

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

logger = logging.getLogger("message_service")

# Send service logs to stdout and quiet the AWS SDK
def configure_logging(level: str = "INFO"):
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(stdout_handler)
    root_logger.setLevel(level.upper())

    for name in ("botocore", "boto3", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)

# Record a fault as one JSON line; never returned to callers
def log_error(context: str, error: BaseException):
    stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "context": context,
        "error": str(error),
        "stack": stack,
    }
    logger.error(json.dumps(payload, default=str, separators=(",", ":")))
