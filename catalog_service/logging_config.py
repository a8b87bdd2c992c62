import logging


LOG_FORMAT = "[%(asctime)s: %(levelname)s/%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logger with a single console handler.

    Calling it again (tests build several apps) only updates the level.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(getattr(handler, "_catalog_handler", False) for handler in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._catalog_handler = True
    root.addHandler(handler)
