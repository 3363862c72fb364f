# synccircle/utils/logging_config.py

import logging
import os
import re
from datetime import datetime
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler
import sys

# Regex pattern to detect and remove ANSI escape codes (for colors)
ANSI_ESCAPE_PATTERN = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

LOGGER_NAME = "synccircle"

class ColorStripFilter(logging.Filter):
    """A logging filter that removes ANSI color codes from log messages."""
    def filter(self, record):
        if hasattr(record, 'msg') and isinstance(record.msg, str):
            record.msg = ANSI_ESCAPE_PATTERN.sub('', record.msg)
        return True

# Module-level flag to ensure this setup runs only once per process
_logging_configured = False

def setup_logging(log_dir=None):
    """
    Configure logging for the application. Sets up console and rotating file handlers.
    Ensures configuration happens only once per process.

    Returns:
        logging.Logger: The configured "synccircle" logger.
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger(LOGGER_NAME)

    log_dir = Path(log_dir or os.environ.get('LOG_DIR', 'logs'))
    log_dir.mkdir(parents=True, exist_ok=True)

    current_date = datetime.now().strftime("%d-%m-%Y")
    log_file = log_dir / f'synccircle_{current_date}.log'

    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    formatter = logging.Formatter(log_format)

    # --- Main application logger ---
    app_logger = logging.getLogger(LOGGER_NAME)
    if not app_logger.hasHandlers():
        app_logger.setLevel(logging.INFO)
        app_logger.propagate = False

        # Console output only when attached to a terminal
        if sys.stdout.isatty():
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            app_logger.addHandler(console_handler)

        file_handler = TimedRotatingFileHandler(
            filename=log_file,
            when='midnight',
            interval=1,
            backupCount=30,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.suffix = "%Y-%m-%d"
        file_handler.addFilter(ColorStripFilter())
        app_logger.addHandler(file_handler)

        app_logger.info(f"Logging initialized for '{LOGGER_NAME}' logger. Log file: {log_file}")

    # --- Werkzeug (dev server request log) shares the app handlers ---
    werkzeug_logger = logging.getLogger('werkzeug')
    if not werkzeug_logger.hasHandlers():
        werkzeug_logger.setLevel(logging.INFO)
        werkzeug_logger.propagate = False
        for handler in app_logger.handlers:
            werkzeug_logger.addHandler(handler)

    # --- SQLAlchemy: warnings only, INFO would log every statement ---
    sqlalchemy_logger = logging.getLogger('sqlalchemy.engine')
    if not sqlalchemy_logger.hasHandlers():
        sqlalchemy_logger.setLevel(logging.WARNING)
        sqlalchemy_logger.propagate = False

    _logging_configured = True
    return app_logger
