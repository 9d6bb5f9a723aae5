from loguru import logger
import os
import sys
from pathlib import Path

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_DIR = Path(os.environ['HMIS_OUTLIERS_LOG_DIR']) if os.getenv('HMIS_OUTLIERS_LOG_DIR') else None
LOG_PATH = LOG_DIR / 'hmis_outliers.log' if LOG_DIR else None

logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)
# file sink only when a log directory is configured
if LOG_PATH:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logger.add(LOG_PATH, level=LOG_LEVEL, rotation='1 MB', retention=10)

__all__ = ['logger']
