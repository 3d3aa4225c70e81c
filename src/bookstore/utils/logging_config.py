"""
Centralized logging configuration for the bookstore service.
Provides component-specific loggers with separate log files.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any

from ..config import get_config


class ComponentLogger:
    """Manages component-specific logging with separate files."""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized = False
    _log_dir: Optional[Path] = None
    _debug = False

    # Component definitions with their log levels
    COMPONENTS = {
        'api': {'level': logging.INFO, 'file': 'api.log'},
        'auth': {'level': logging.INFO, 'file': 'auth.log'},
        'database': {'level': logging.INFO, 'file': 'database.log'},
        'validation': {'level': logging.INFO, 'file': 'validation.log'},
        'security': {'level': logging.INFO, 'file': 'security.log'},
        'main': {'level': logging.INFO, 'file': 'main.log'},
        'error': {'level': logging.ERROR, 'file': 'errors.log'},  # Centralized error log
    }

    DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s'
    SIMPLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

    @classmethod
    def initialize(cls, log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
        """
        Initialize the logging system with component-specific loggers.

        Args:
            log_dir: Directory for log files. Defaults to config.app.log_dir
            debug: Enable debug logging for all components. Defaults to config.server.debug
        """
        if cls._initialized:
            return

        config = get_config()
        cls._debug = config.server.debug if debug is None else debug

        if config.app.log_to_file:
            cls._log_dir = Path(log_dir or config.app.log_dir)
            cls._log_dir.mkdir(parents=True, exist_ok=True)

        detailed_formatter = logging.Formatter(cls.DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

        root_level = logging.DEBUG if cls._debug else logging.INFO

        unified_handler = None
        if cls._log_dir is not None:
            unified_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / 'unified.log',
                maxBytes=20 * 1024 * 1024,  # 20MB
                backupCount=3,
                encoding='utf-8'
            )
            unified_handler.setLevel(root_level)
            unified_handler.setFormatter(detailed_formatter)

        for component_name, component_config in cls.COMPONENTS.items():
            level = logging.DEBUG if cls._debug else component_config['level']
            cls._loggers[component_name] = cls._build_logger(
                component_name, level, component_config['file'], unified_handler
            )

        cls._initialized = True

        main_logger = cls._loggers['main']
        main_logger.info("Bookstore logging system initialized")
        main_logger.info(f"Log directory: {cls._log_dir or '(console only)'}")
        main_logger.info(f"Debug mode: {cls._debug}")

    @classmethod
    def _build_logger(
        cls,
        component: str,
        level: int,
        file_name: str,
        unified_handler: Optional[logging.Handler],
    ) -> logging.Logger:
        logger = logging.getLogger(f"bookstore.{component}")
        logger.handlers.clear()
        logger.propagate = False
        logger.setLevel(level)

        if cls._log_dir is not None:
            file_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / file_name,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(
                logging.Formatter(cls.DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
            )
            logger.addHandler(file_handler)
            if unified_handler is not None:
                logger.addHandler(unified_handler)

        # Errors always reach the console
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.ERROR if cls._log_dir is not None else level)
        console_handler.setFormatter(logging.Formatter(cls.SIMPLE_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(console_handler)

        return logger

    @classmethod
    def get_logger(cls, component: str) -> logging.Logger:
        """
        Get a logger for a specific component.

        Args:
            component: Component name (api, auth, database, validation, ...)

        Returns:
            Logger instance for the component
        """
        if not cls._initialized:
            cls.initialize()

        if component not in cls._loggers:
            level = logging.DEBUG if cls._debug else logging.INFO
            unified = None
            for handler in cls._loggers['main'].handlers:
                if getattr(handler, 'baseFilename', '').endswith('unified.log'):
                    unified = handler
            cls._loggers[component] = cls._build_logger(
                component, level, f'{component}.log', unified
            )

        return cls._loggers[component]

    @classmethod
    def log_exception(cls, component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an exception with context to both component and error logs.

        Args:
            component: Component where the exception occurred
            exc: The exception to log
            context: Additional context information
        """
        component_logger = cls.get_logger(component)
        error_logger = cls.get_logger('error')

        context_str = ""
        if context:
            context_str = " | Context: " + ", ".join(f"{k}={v}" for k, v in context.items())

        component_logger.error(f"Exception in {component}: {type(exc).__name__}: {exc}{context_str}", exc_info=exc)
        error_logger.error(f"[{component}] {type(exc).__name__}: {exc}{context_str}", exc_info=exc)


def get_logger(component: str) -> logging.Logger:
    """Get a logger for a specific component."""
    return ComponentLogger.get_logger(component)


def initialize_logging(log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
    """Initialize the logging system."""
    ComponentLogger.initialize(log_dir=log_dir, debug=debug)


def log_exception(component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log an exception with context."""
    ComponentLogger.log_exception(component, exc, context)
