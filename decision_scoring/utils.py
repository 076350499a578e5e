"""Utility functions for decision scoring."""

import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .models import NotApplicable

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'config.yaml'


def load_config(config_path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file; the bundled default when omitted

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f)

    return config or {}


def setup_logging(config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Setup logging configuration.

    Args:
        config: Logging configuration dictionary

    Returns:
        Configured logger instance
    """
    if config is None:
        config = {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        }

    logger = logging.getLogger('decision_scoring')
    logger.setLevel(getattr(logging, config.get('level', 'INFO')))

    # Reconfiguring replaces the handlers installed by an earlier call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(config.get('format')))
    logger.addHandler(console_handler)

    # File handler with rotation
    if config.get('file'):
        file_handler = logging.handlers.RotatingFileHandler(
            config['file'],
            maxBytes=config.get('max_bytes', 10485760),
            backupCount=config.get('backup_count', 5)
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(config.get('format')))
        logger.addHandler(file_handler)

    return logger


def format_score(score: float) -> str:
    """Format a score with one decimal place."""
    return f"{score:.1f}"


def format_points(points: float) -> str:
    """Format a point difference with one decimal place."""
    return f"{points:.1f}"


def format_percent(percent) -> str:
    """Format a percentage difference as a whole number.

    Returns ``"n/a"`` for a percentage that cannot be computed.
    """
    if percent is None or percent is NotApplicable:
        return "n/a"
    return f"{percent:.0f}"


def format_date(value: datetime) -> str:
    """Format a timestamp for display, e.g. ``March 4, 2025``."""
    return f"{value:%B} {value.day}, {value.year}"
