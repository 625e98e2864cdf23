"""
Logging configuration for the leave dashboard.

Console output only; JSON lines when LOG_JSON is enabled so the logs can be
shipped by the hosting platform as-is.
"""

import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from leavedash.core.config import settings


class DashboardJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with timestamp, level and logger name"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name


LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        },
        'json': {
            '()': DashboardJsonFormatter,
            'format': '%(timestamp)s %(level)s %(logger)s %(message)s'
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'json' if settings.LOG_JSON else 'standard',
        },
    },
    'loggers': {
        'leavedash': {
            'handlers': ['console'],
            'level': settings.LOG_LEVEL,
            'propagate': False
        },
        'httpx': {  # One line per backend call at INFO
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False
        },
        'sqlalchemy.engine': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False
        },
    }
}


def setup_logging():
    """Configure application logging"""
    logging.config.dictConfig(LOGGING_CONFIG)
    logger = logging.getLogger("leavedash")
    logger.info("Logging initialized with level: %s", settings.LOG_LEVEL)
    return logger
