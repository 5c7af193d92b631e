import logging
import json
from datetime import datetime, timezone

SERVICE_NAME = "user-proxy"

logger = logging.getLogger("user_proxy")

_environment = "development"


def configure_logging(environment: str, log_level: str = "INFO"):
    global _environment
    _environment = environment
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, log_level.upper(), logging.INFO)
    )
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def log_structured(message: str, level: str = "INFO", **kwargs):
    log_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": _environment,
        "service": SERVICE_NAME,
        "message": message,
        **kwargs
    }
    getattr(logger, level.lower())(json.dumps(log_data, default=str))
