import logging

from reelmatch.config.settings import settings

_NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "openai", "pymongo")
_quieted = False


def _quiet_third_party() -> None:
    global _quieted
    if _quieted:
        return
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _quieted = True


def get_logger(name: str, level: int | str | None = None) -> logging.Logger:
    if level is None:
        level = settings.LOG_LEVEL.upper()
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _quiet_third_party()
    return logger
