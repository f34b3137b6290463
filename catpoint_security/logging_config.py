"""Centralized logging configuration for the catpoint security system."""

import logging
import logging.handlers
import os
import sys
from typing import Optional, Dict
from pathlib import Path


class StructuredFormatter(logging.Formatter):
    """Formatter that appends structured context to log records."""

    def __init__(self, include_context: bool = True):
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        base_format = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"

        if self.include_context and hasattr(record, 'context'):
            context_str = " | ".join([f"{k}={v}" for k, v in record.context.items()])
            base_format += f" | Context: {context_str}"

        if record.levelno >= logging.ERROR and record.exc_info:
            base_format += " | %(pathname)s:%(lineno)d"

        formatter = logging.Formatter(base_format)
        return formatter.format(record)


class ContextFilter(logging.Filter):
    """Filter that tags records with the component and process."""

    def __init__(self, component_name: Optional[str] = None):
        super().__init__()
        self.component_name = component_name
        self.process_id = os.getpid()

    def filter(self, record: logging.LogRecord) -> bool:
        record.process_id = self.process_id
        if self.component_name:
            record.component = self.component_name
        return True


class LoggingManager:
    """Owns the root handlers and the per-component loggers."""

    def __init__(self, log_dir: Optional[str] = None, log_level: int = logging.INFO):
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = log_level
        self.max_log_size = 10 * 1024 * 1024  # 10MB
        self.backup_count = 5

        self.component_loggers: Dict[str, logging.Logger] = {}

        self._setup_root_logger()

    @property
    def main_log_file(self) -> Optional[Path]:
        return self.log_dir / "catpoint.log" if self.log_dir else None

    @property
    def error_log_file(self) -> Optional[Path]:
        return self.log_dir / "errors.log" if self.log_dir else None

    def _setup_root_logger(self) -> None:
        """Attach console and, when a log directory is set, rotating file handlers."""
        root_logger = logging.getLogger("catpoint")
        root_logger.setLevel(self.log_level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(StructuredFormatter(include_context=False))
        root_logger.addHandler(console_handler)

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)

        main_file_handler = logging.handlers.RotatingFileHandler(
            self.main_log_file,
            maxBytes=self.max_log_size,
            backupCount=self.backup_count
        )
        main_file_handler.setLevel(logging.DEBUG)
        main_file_handler.setFormatter(StructuredFormatter(include_context=True))
        root_logger.addHandler(main_file_handler)

        # Errors and critical only
        error_file_handler = logging.handlers.RotatingFileHandler(
            self.error_log_file,
            maxBytes=self.max_log_size,
            backupCount=self.backup_count
        )
        error_file_handler.setLevel(logging.ERROR)
        error_file_handler.setFormatter(StructuredFormatter(include_context=True))
        root_logger.addHandler(error_file_handler)

        root_logger.info("Logging system initialized")

    def get_component_logger(self, component_name: str,
                             log_level: Optional[int] = None) -> logging.Logger:
        """Get or create a logger for a specific component."""
        if component_name in self.component_loggers:
            return self.component_loggers[component_name]

        logger = logging.getLogger(f"catpoint.{component_name}")
        if log_level:
            logger.setLevel(log_level)
        logger.addFilter(ContextFilter(component_name))

        self.component_loggers[component_name] = logger
        return logger


# Global logging manager instance, console only until setup_logging() is called
logging_manager = LoggingManager()


def get_logger(component_name: str) -> logging.Logger:
    """Convenience function to get a component logger."""
    return logging_manager.get_component_logger(component_name)


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = "logs") -> LoggingManager:
    """Setup centralized logging system."""
    global logging_manager

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging_manager = LoggingManager(log_dir, numeric_level)
    return logging_manager
