"""
Logging for the extractor: console on stderr, rotating files for everything
and for errors alone
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from config import settings

CONSOLE_FORMAT = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
FILE_FORMAT = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


def _rotating_handler(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=settings.get('log_file_max_bytes', 10485760),
        backupCount=settings.get('log_file_backup_count', 10)
    )
    handler.setLevel(level)
    handler.setFormatter(FILE_FORMAT)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger; handlers are attached once per name"""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    log_level = getattr(logging, str(settings.get('log_level', 'INFO')).upper(), logging.INFO)
    logger.setLevel(log_level)

    log_dir = Path(settings.get('log_dir', 'logs'))
    log_dir.mkdir(parents=True, exist_ok=True)

    # stdout is reserved for reports
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(CONSOLE_FORMAT)

    logger.addHandler(console_handler)
    logger.addHandler(_rotating_handler(log_dir / settings.get('log_file', 'patient_extractor.log'), logging.DEBUG))
    logger.addHandler(_rotating_handler(log_dir / "errors.log", logging.ERROR))
    logger.propagate = False

    return logger


def configure_root_logger():
    """Keep spaCy and transformers chatter at WARNING and above"""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CONSOLE_FORMAT)
        root_logger.addHandler(handler)


configure_root_logger()
