import logging

LOG_FORMAT = "%(name)s [%(levelname)s] : %(message)s"
ROOT_LOGGER = "sudoku_solver"
DEFAULT_LEVEL = logging.INFO


def get_logger(name: str, level=None) -> logging.Logger:
    """Return a logger inside the ``sudoku_solver`` tree.

    Names from outside the package (the ``app`` and ``game`` scripts, or
    ``__main__``) are nested under it so ``set_level`` reaches them. Loggers
    inherit their level from the package logger unless ``level`` is given.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"

    root = logging.getLogger(ROOT_LOGGER)
    if root.level == logging.NOTSET:
        root.setLevel(DEFAULT_LEVEL)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
    return logger


def set_level(level) -> None:
    """Set the level of the ``sudoku_solver`` logger tree, including loggers created later."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    logging.getLogger(ROOT_LOGGER).setLevel(level)
