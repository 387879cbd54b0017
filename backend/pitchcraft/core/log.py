import logging
import sys

from pitchcraft.core.config import settings

_DEFAULT_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_configured = False


def configure_logging(level: str | None = None, fmt: str = _DEFAULT_FMT) -> None:
    """Configure the root logger once, honouring ``LOG_LEVEL``."""
    global _configured
    if _configured:
        return

    level_name = (level or settings.LOG_LEVEL).upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level_value)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            if not handler.formatter:
                handler.setFormatter(logging.Formatter(fmt))

    # Keep server loggers on the same level as the app
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level_value)

    _configured = True
