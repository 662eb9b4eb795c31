import logging
from typing import Optional

from halfstar.core.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """
    Minimal logging setup.
    - Uses settings.LOG_LEVEL if level is None.
    - Configures a single console handler via logging.basicConfig.
    """
    level_name = (level or settings.LOG_LEVEL or "INFO").upper()
    # Fallback to INFO if someone passes something weird
    level_value = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
