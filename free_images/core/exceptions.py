"""
Custom exception handlers and error types
"""

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
import logging
import traceback
from typing import Optional

logger = logging.getLogger(__name__)


class FreeImagesError(Exception):
    """Base exception for image search errors"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class TransportError(FreeImagesError):
    """Exception raised when an HTTP call to the provider fails or times out
    Args:
        message (str): Error message
        url (Optional[str]): Requested URL
        status_code (Optional[int]): HTTP status, when a response was received
    Example:
        raise TransportError("Request timed out", url="https://commons.wikimedia.org/w/api.php")
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, "TRANSPORT_ERROR")
        self.url = url
        self.status_code = status_code


class ResponseFormatError(FreeImagesError):
    """Exception raised when a provider response cannot be decoded"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, "RESPONSE_FORMAT_ERROR")
        self.url = url


class ConfigurationError(FreeImagesError):
    """Exception raised when configuration is invalid"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key


class PreferenceStoreError(FreeImagesError):
    """Exception raised when user preferences cannot be read or written"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, "PREFERENCE_STORE_ERROR")
        self.path = path


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format"""
    logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")

    if isinstance(exc.detail, dict):
        detail = exc.detail
    else:
        detail = {"error": "HTTP Error", "details": str(exc.detail)}

    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


async def free_images_exception_handler(request: Request, exc: FreeImagesError):
    """Handle image search errors"""
    logger.error(f"Image search error: {exc.message}")
    status_code = 502 if isinstance(exc, (TransportError, ResponseFormatError)) else 500
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": {
                "error": "Image search failed",
                "details": exc.message,
                "error_code": exc.error_code,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.error(f"Unexpected error: {type(exc).__name__}: {str(exc)}")
    logger.error(f"Traceback: {traceback.format_exc()}")

    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "Internal server error",
                "details": "An unexpected error occurred",
            }
        },
    )
