"""Logging setup for processes embedding the drive reconciler."""
import logging
from typing import Optional

from ..config import base_config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(debug: Optional[bool] = None):
    """Configure logging with consistent format."""
    if debug is None:
        debug = base_config.DEBUG
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT
    )
