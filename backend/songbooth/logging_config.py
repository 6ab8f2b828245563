"""Root logger setup, applied once when the app is created."""
import logging


def setup_logging(level: str = "INFO") -> None:
    """Attach a console handler to the root logger unless one exists.

    Repeated calls (tests build the app more than once) are no-ops.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)
