"""
Common exception classes for the application
"""
from typing import Optional, Dict, Any

class PostboardError(Exception):
    """Base exception class for postboard errors"""
    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}

class ConfigurationError(PostboardError):
    """Raised when there's an error in configuration or environment variables"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)

class StorageError(PostboardError):
    """Raised when an upload cannot be written to the file store"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="STORAGE_ERROR", details=details)

class PersistenceError(PostboardError):
    """Raised when a post record cannot be written or read"""
    def __init__(self, message: str, unavailable: bool = False, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="PERSISTENCE_ERROR", details=details)
        self.unavailable = unavailable
