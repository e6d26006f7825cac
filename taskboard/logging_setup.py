import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once, early, before the server starts.

    Does nothing to handlers when the root logger already has some
    (uvicorn reloaders, pytest), only the level is applied.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    root.addHandler(handler)
    logging.captureWarnings(True)
