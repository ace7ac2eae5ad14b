import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: int = logging.WARNING, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI format.

    Pass ``force=True`` to reconfigure when handlers are already installed
    (tests, repeated CLI invocations in one process).
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
