# DEPENDENCIES
import sys
import time
import json
import inspect
import logging
import traceback
from typing import Any
from typing import Dict
from pathlib import Path
from typing import Optional
from functools import wraps
from datetime import datetime



class ContractEngineLogger:
    """
    Structured logging for the contract analysis engine
    Features:
    - Structured JSON logging
    - Separate files for errors and performance metrics
    - Execution time decorator for sync and async callables
    """
    _loggers : Dict[str, logging.Logger] = dict()
    _log_dir : Optional[Path]            = None

    # Log levels
    DEBUG                                = logging.DEBUG
    INFO                                 = logging.INFO
    WARNING                              = logging.WARNING
    ERROR                                = logging.ERROR
    CRITICAL                             = logging.CRITICAL


    @classmethod
    def setup(cls, log_dir: str = "logs", app_name: str = "contract_engine", level: int = logging.INFO):
        """
        Setup logging system

        Arguments:
        ----------
            log_dir  { str } : Directory for log files

            app_name { str } : Application name for log files

            level    { int } : Level of the main logger
        """
        cls._log_dir = Path(log_dir)
        cls._log_dir.mkdir(parents = True, exist_ok = True)

        # Create main logger
        cls._create_logger(name     = app_name,
                           log_file = cls._log_dir / f"{app_name}.log",
                           level    = level,
                          )

        # Create error logger
        cls._create_logger(name     = f"{app_name}.error",
                           log_file = cls._log_dir / f"{app_name}_error.log",
                           level    = logging.ERROR,
                          )

        # Create performance logger
        cls._create_logger(name     = f"{app_name}.performance",
                           log_file = cls._log_dir / f"{app_name}_performance.log",
                           level    = logging.INFO,
                          )


    @classmethod
    def _create_logger(cls, name: str, log_file: Path, level: int) -> logging.Logger:
        """
        Create and configure a logger
        """
        logger             = logging.getLogger(name)
        logger.setLevel(level)

        # Child loggers must not duplicate into the main logger
        logger.propagate   = False
        logger.handlers.clear()

        file_handler       = logging.FileHandler(log_file, encoding = "utf-8")
        file_handler.setLevel(level)

        # Console handler (for warnings and above)
        console_handler    = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)

        formatter          = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt = '%Y-%m-%d %H:%M:%S')
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        cls._loggers[name] = logger

        return logger


    @classmethod
    def _lazy_setup(cls):
        """
        Initialize from settings on first use
        """
        from config.settings import settings

        cls.setup(log_dir = str(settings.LOG_DIR),
                  level   = logging.getLevelName(settings.LOG_LEVEL.upper()),
                 )


    @classmethod
    def get_logger(cls, name: str = "contract_engine") -> logging.Logger:
        """
        Get logger by name
        """
        if name not in cls._loggers:
            cls._lazy_setup()

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

        log_data = {"timestamp"  : datetime.now().isoformat(),
                    "message"    : message,
                    **kwargs
                   }

        logger.log(level, json.dumps(log_data, default = str, ensure_ascii = False))


    @classmethod
    def log_error(cls, error: Exception, context: Dict[str, Any] = None):
        """
        Log error with full traceback and context

        Arguments:
        ----------
            error      { Exception } : Exception object

            context      { dict }    : Additional context dictionary
        """
        error_logger = cls._loggers.get("contract_engine.error")

        if not error_logger:
            error_logger = cls.get_logger("contract_engine.error")

        error_data = {"timestamp"     : datetime.now().isoformat(),
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
        perf_logger = cls._loggers.get("contract_engine.performance")

        if not perf_logger:
            perf_logger = cls.get_logger("contract_engine.performance")

        perf_data = {"timestamp"        : datetime.now().isoformat(),
                     "operation"        : operation,
                     "duration_seconds" : round(duration, 3),
                     **metrics
                    }

        perf_logger.info(json.dumps(perf_data, default = str))


    @staticmethod
    def log_execution_time(operation_name: str = None):
        """
        Decorator to log execution time of functions and coroutine functions
        """
        def decorator(func):
            op_name = operation_name or func.__name__

            def _record(start_time: float, error: Optional[Exception] = None):
                duration = time.time() - start_time

                if error is None:
                    ContractEngineLogger.log_performance(operation = op_name,
                                                         duration  = duration,
                                                         status    = "success",
                                                        )
                    return

                ContractEngineLogger.log_performance(operation = op_name,
                                                     duration  = duration,
                                                     status    = "error",
                                                     error     = str(error),
                                                    )

                ContractEngineLogger.log_error(error, context = {"operation" : op_name})

            if inspect.iscoroutinefunction(func):
                @wraps(func)
                async def async_wrapper(*args, **kwargs):
                    start_time = time.time()

                    try:
                        result = await func(*args, **kwargs)

                    except Exception as e:
                        _record(start_time, e)
                        raise

                    _record(start_time)
                    return result

                return async_wrapper

            @wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.time()

                try:
                    result = func(*args, **kwargs)

                except Exception as e:
                    _record(start_time, e)
                    raise

                _record(start_time)
                return result

            return wrapper

        return decorator



# Convenience functions
def log_info(message: str, **kwargs):
    """
    Log info message
    """
    ContractEngineLogger.log_structured(logging.INFO, message, **kwargs)


def log_warning(message: str, **kwargs):
    """
    Log warning message
    """
    ContractEngineLogger.log_structured(logging.WARNING, message, **kwargs)


def log_error(error: Exception, context: Dict[str, Any] = None):
    """
    Log error with context
    """
    ContractEngineLogger.log_error(error, context)


def log_debug(message: str, **kwargs):
    """
    Log debug message
    """
    ContractEngineLogger.log_structured(logging.DEBUG, message, **kwargs)
