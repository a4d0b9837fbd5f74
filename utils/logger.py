# DEPENDENCIES
import sys
import time
import json
import logging
import threading
import traceback
from typing import Any
from typing import Dict
from pathlib import Path
from typing import Optional
from functools import wraps
from datetime import datetime

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from config.settings import settings


class RiskEngineLogger:
    """
    Logging for the risk analysis engine and its HTTP service
    Features:
    - Structured JSON logging
    - Separate files for errors and performance metrics
    - Execution time decorator for public operations
    """
    _loggers  : Dict[str, logging.Logger] = dict()
    _log_dir  : Optional[Path]            = None
    _app_name : str                       = settings.LOG_APP_NAME
    _lock     : threading.RLock           = threading.RLock()

    # Log levels
    DEBUG                                 = logging.DEBUG
    INFO                                  = logging.INFO
    WARNING                               = logging.WARNING
    ERROR                                 = logging.ERROR


    @classmethod
    def setup(cls, log_dir: str = None, app_name: str = None, level: str = None):
        """
        Setup logging system

        Arguments:
        ----------
            log_dir  { str } : Directory for log files

            app_name { str } : Application name for log files

            level    { str } : Level name for the main logger
        """
        log_dir    = Path(log_dir or settings.LOG_DIR)
        app_name   = app_name or settings.LOG_APP_NAME
        main_level = logging.getLevelName((level or settings.LOG_LEVEL).upper())

        if not isinstance(main_level, int):
            main_level = cls.INFO

        # Handlers are swapped under the lock; _log_dir is published last
        with cls._lock:
            log_dir.mkdir(parents = True, exist_ok = True)

            cls._app_name = app_name

            # Create main logger
            cls._create_logger(name     = app_name,
                               log_file = log_dir / f"{app_name}.log",
                               level    = main_level,
                              )

            # Create error logger
            cls._create_logger(name     = f"{app_name}.error",
                               log_file = log_dir / f"{app_name}_error.log",
                               level    = cls.ERROR,
                              )

            # Create performance logger
            cls._create_logger(name     = f"{app_name}.performance",
                               log_file = log_dir / f"{app_name}_performance.log",
                               level    = cls.INFO,
                              )

            cls._log_dir = log_dir


    @classmethod
    def _create_logger(cls, name: str, log_file: Path, level: int) -> logging.Logger:
        """
        Create and configure a logger
        """
        logger             = logging.getLogger(name)
        logger.setLevel(level)

        # Clear existing handlers
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        # File handler
        file_handler       = logging.FileHandler(log_file, encoding = "utf-8")
        file_handler.setLevel(level)

        # Console handler (for warnings and above)
        console_handler    = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(cls.WARNING)

        # Formatter
        formatter          = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt = '%Y-%m-%d %H:%M:%S')
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        cls._loggers[name] = logger

        return logger


    @classmethod
    def get_logger(cls, name: str = None) -> logging.Logger:
        """
        Get logger by name
        """
        if cls._log_dir is None:
            # Lazy initialization, at most once across threads
            with cls._lock:
                if cls._log_dir is None:
                    cls.setup()

        name = name or cls._app_name

        return cls._loggers.get(name, logging.getLogger(name))


    @classmethod
    def log_structured(cls, level: int, message: str, **kwargs):
        """
        Log structured data as JSON

        Arguments:
        ----------
            level      { int } : Log level

            message    { str } : Log message

            **kwargs           : Additional structured data
        """
        logger   = cls.get_logger()

        log_data = {"timestamp" : datetime.now().isoformat(),
                    "message"   : message,
                    **kwargs
                   }

        logger.log(level, json.dumps(log_data, default = str))


    @classmethod
    def log_error(cls, error: Exception, context: Dict[str, Any] = None):
        """
        Log error with full traceback and context

        Arguments:
        ----------
            error      { Exception } : Exception object

            context      { dict }    : Additional context dictionary
        """
        error_logger = cls.get_logger(f"{cls._app_name}.error")

        error_data   = {"timestamp"     : datetime.now().isoformat(),
                        "error_type"    : type(error).__name__,
                        "error_message" : str(error),
                        "traceback"     : traceback.format_exc(),
                        "context"       : context or {},
                       }

        error_logger.error(json.dumps(error_data, indent = 2, default = str))


    @classmethod
    def log_performance(cls, operation: str, duration: float, **metrics):
        """
        Log performance metrics

        Arguments:
        ----------
            operation  { str }  : Operation name

            duration  { float } : Duration in seconds

            **metrics           : Additional metrics
        """
        perf_logger = cls.get_logger(f"{cls._app_name}.performance")

        perf_data   = {"timestamp"        : datetime.now().isoformat(),
                       "operation"        : operation,
                       "duration_seconds" : round(duration, 3),
                       **metrics
                      }

        perf_logger.info(json.dumps(perf_data, default = str))


    @staticmethod
    def log_execution_time(operation_name: str = None):
        """
        Decorator to log execution time of functions
        """
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                op_name    = operation_name or func.__name__
                start_time = time.perf_counter()

                try:
                    result   = func(*args, **kwargs)
                    duration = time.perf_counter() - start_time

                    RiskEngineLogger.log_performance(operation = op_name,
                                                     duration  = duration,
                                                     status    = "success",
                                                    )

                    return result

                except Exception as e:
                    duration = time.perf_counter() - start_time

                    RiskEngineLogger.log_performance(operation = op_name,
                                                     duration  = duration,
                                                     status    = "error",
                                                     error     = str(e),
                                                    )

                    RiskEngineLogger.log_error(e, context = {"operation" : op_name})
                    raise

            return wrapper

        return decorator



# Convenience functions
def get_logger(name: str = None) -> logging.Logger:
    """
    Get logger instance
    """
    return RiskEngineLogger.get_logger(name)


def log_info(message: str, **kwargs):
    """
    Log info message
    """
    RiskEngineLogger.log_structured(RiskEngineLogger.INFO, message, **kwargs)


def log_warning(message: str, **kwargs):
    """
    Log warning message
    """
    RiskEngineLogger.log_structured(RiskEngineLogger.WARNING, message, **kwargs)


def log_error(error: Exception, context: Dict[str, Any] = None):
    """
    Log error with context
    """
    RiskEngineLogger.log_error(error, context)


def log_debug(message: str, **kwargs):
    """
    Log debug message
    """
    RiskEngineLogger.log_structured(RiskEngineLogger.DEBUG, message, **kwargs)
