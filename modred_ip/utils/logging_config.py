import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging() -> None:
    """Install a single stream handler; level from MODRED_LOG_LEVEL (default INFO). Safe to call repeatedly."""
    level_name = (os.environ.get("MODRED_LOG_LEVEL") or "INFO").strip().upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if getattr(root, "_modred_configured", False):
        root.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root.handlers = [handler]
    root.setLevel(level)
    setattr(root, "_modred_configured", True)
