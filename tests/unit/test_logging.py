"""Unit tests for logging setup."""
import logging
from unittest.mock import patch

from drive_reconciler.utils import setup_logging
from drive_reconciler.utils.logging import LOG_FORMAT


def test_setup_logging_debug():
    with patch("logging.basicConfig") as mock_basic_config:
        setup_logging(debug=True)
    mock_basic_config.assert_called_once_with(level=logging.DEBUG, format=LOG_FORMAT)


def test_setup_logging_defaults_to_info():
    with patch("logging.basicConfig") as mock_basic_config:
        setup_logging(debug=False)
    mock_basic_config.assert_called_once_with(level=logging.INFO, format=LOG_FORMAT)
