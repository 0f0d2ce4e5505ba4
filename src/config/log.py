"""structlog setup shared by the Django ``LOGGING`` dict.

Every record, whether emitted through structlog or the stdlib ``logging``
module, is rendered as one JSON line with credentials and CPF numbers
masked.
"""

import re

import structlog

MASK = "***MASKED***"

# Keys whose whole value is hidden, whatever it looks like.
SENSITIVE_KEYS = frozenset(
    {"password", "token", "access_token", "refresh", "access", "authorization"}
)

# Secrets embedded in free text: CPF numbers, ``key=value`` credentials
# and bearer tokens.
SENSITIVE_PATTERN = re.compile(
    r"(\d{3}\.?\d{3}\.?\d{3}-?\d{2})"
    r"|(bearer\s+[\w\-.]+)"
    r"|(password|passwd|secret|token|authorization)"
    r"""([=:]\s*["']?)([^\s,}"']+)""",
    re.IGNORECASE,
)


def mask_sensitive_data(_, __, event_dict):
    """Processor that masks credentials and CPF numbers in log values."""
    for key, value in list(event_dict.items()):
        if key.lower() in SENSITIVE_KEYS and value:
            event_dict[key] = MASK
        elif isinstance(value, str):
            event_dict[key] = SENSITIVE_PATTERN.sub(MASK, value)
    return event_dict


SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_structlog():
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def build_logging(level="INFO"):
    """Return the ``LOGGING`` dict routing everything to a JSON console."""
    quiet = {"handlers": ["console"], "level": "WARNING", "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(ensure_ascii=False),
                ],
                "foreign_pre_chain": SHARED_PROCESSORS,
            },
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "json"},
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": {
            "modules": {"level": level},
            "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
            "django.server": quiet,
            "urllib3": quiet,
        },
    }
