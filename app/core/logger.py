# app/core/logger.py
import structlog, logging, sys

def setup_logging(level: str = "INFO", stream=sys.stdout):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=stream,
        format="%(message)s",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger("pr_review")

def get_logger(name: str = None):
    return structlog.get_logger(name)
