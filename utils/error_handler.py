"""
Error Handling Module for AtCoder Sample Fetcher

This module provides the custom exceptions and the error reporter used while
resolving contests, fetching problem pages and writing sample files.
"""

import logging
import threading
import traceback
import functools
from typing import Dict, Any, Optional, Callable, List
from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels"""
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification"""
    NETWORK = "network"
    PARSE = "parse"
    CONTENT_MISSING = "content_missing"
    FILE_SYSTEM = "file_system"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Structured error information"""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    original_exception: Optional[Exception] = None
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    traceback_str: Optional[str] = None


# =============================================================================
# Custom Exception Classes
# =============================================================================

class SampleFetcherError(Exception):
    """Base exception for all sample fetcher errors"""

    def __init__(self, message: str, error_info: Optional[ErrorInfo] = None):
        super().__init__(message)
        self.error_info = error_info or ErrorInfo(
            message=message,
            category=ErrorCategory.UNKNOWN,
            severity=ErrorSeverity.MEDIUM
        )


class FetchError(SampleFetcherError):
    """Transport failures and unexpected HTTP statuses"""

    def __init__(self, message: str, original_exception: Optional[Exception] = None,
                 url: Optional[str] = None, status_code: Optional[int] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.HIGH,
            original_exception=original_exception,
            context={"url": url, "status_code": status_code}
        )
        super().__init__(message, error_info)
        self.url = url
        self.status_code = status_code


class ParseError(SampleFetcherError):
    """The returned document could not be parsed as HTML"""

    def __init__(self, message: str, original_exception: Optional[Exception] = None,
                 url: Optional[str] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.PARSE,
            severity=ErrorSeverity.HIGH,
            original_exception=original_exception,
            context={"url": url} if url else {},
        )
        super().__init__(message, error_info)
        self.url = url


class NotFoundError(SampleFetcherError):
    """Missing problem page (404) or no matching contest in the archive"""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.CONTENT_MISSING,
            severity=ErrorSeverity.MEDIUM,
            context={"url": url, "status_code": status_code}
        )
        super().__init__(message, error_info)
        self.url = url
        self.status_code = status_code


class FileSystemError(SampleFetcherError):
    """Directory creation or file write failures"""

    def __init__(self, message: str, path: Optional[str] = None,
                 original_exception: Optional[Exception] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.FILE_SYSTEM,
            severity=ErrorSeverity.HIGH,
            original_exception=original_exception,
            context={"path": path} if path else {}
        )
        super().__init__(message, error_info)
        self.path = path


class ConfigurationError(SampleFetcherError):
    """Invalid configuration values"""

    def __init__(self, message: str, option: Optional[str] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            context={"option": option} if option else {},
        )
        super().__init__(message, error_info)
        self.option = option


# =============================================================================
# Error Reporting
# =============================================================================

class ErrorReporter:
    """Centralized error reporting and logging"""

    def __init__(self):
        self.error_history: List[ErrorInfo] = []
        self._lock = threading.Lock()

    def report_error(self, error_info: ErrorInfo):
        """Report an error with full context"""
        with self._lock:
            self.error_history.append(error_info)

        if error_info.severity == ErrorSeverity.CRITICAL:
            logger.critical(f"CRITICAL ERROR: {error_info.message}")
        elif error_info.severity == ErrorSeverity.HIGH:
            logger.error(f"ERROR: {error_info.message}")
        else:
            logger.warning(f"WARNING: {error_info.message}")

        if error_info.context:
            logger.debug(f"Context: {error_info.context}")

        if error_info.traceback_str:
            logger.debug(f"Traceback: {error_info.traceback_str}")

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all reported errors"""
        with self._lock:
            history = list(self.error_history)

        categories = {}
        for error in history:
            cat = error.category.value
            categories[cat] = categories.get(cat, 0) + 1

        return {
            "total_errors": len(history),
            "categories": categories,
        }

    def clear(self):
        with self._lock:
            self.error_history.clear()


# Global error reporter instance
error_reporter = ErrorReporter()


def handle_exception(func: Callable) -> Callable:
    """Decorator to handle exceptions and report them"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SampleFetcherError as e:
            error_reporter.report_error(e.error_info)
            raise
        except Exception as e:
            error_info = ErrorInfo(
                message=f"Unexpected error in {func.__name__}: {str(e)}",
                category=ErrorCategory.UNKNOWN,
                severity=ErrorSeverity.MEDIUM,
                original_exception=e,
                traceback_str=traceback.format_exc()
            )
            error_reporter.report_error(error_info)
            raise SampleFetcherError(f"Unexpected error: {str(e)}", error_info) from e

    return wrapper
