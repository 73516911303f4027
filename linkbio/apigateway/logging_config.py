from __future__ import annotations

import logging
from pathlib import Path

from .settings import GatewaySettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_BASE = "linkbio"


def configure_logging(settings: GatewaySettings) -> logging.Logger:
    """
    Attach handlers to the `linkbio` logger tree: console always, plus
    `error.log` (ERROR and up) and `combined.log` under LOG_DIR when set.
    Safe to call once per app; handlers are installed only the first time.
    """
    base = logging.getLogger(_BASE)
    base.setLevel(settings.log_level)
    if getattr(base, "_linkbio_configured", False):
        return base

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    base.addHandler(console)

    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        errors = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
        errors.setLevel(logging.ERROR)
        combined = logging.FileHandler(log_dir / "combined.log", encoding="utf-8")
        for handler in (errors, combined):
            handler.setFormatter(formatter)
            base.addHandler(handler)

    base._linkbio_configured = True
    return base
