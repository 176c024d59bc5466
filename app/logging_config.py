import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger exactly once.

    * Console only (StreamHandler -> stderr)
    * ISO-8601 timestamps
    * Unknown level names fall back to INFO
    """
    root = logging.getLogger()
    if root.handlers:
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    for noisy in ("sqlalchemy.engine", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
