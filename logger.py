"""Application logger."""
import logging

logger = logging.getLogger("robusta")
if not logger.handlers:
    h = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    h.setFormatter(fmt)
    logger.addHandler(h)
    logger.setLevel(logging.INFO)


def get_logger(name: str = None):
    if not name or name == "robusta":
        return logger
    return logger.getChild(name)
