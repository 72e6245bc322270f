"""
Logging Configuration - Consistent logging setup for the command line.
"""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure root logger with consistent format on stderr.

    Library modules only create named loggers; this is called by the CLI.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
