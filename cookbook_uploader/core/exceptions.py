"""
Custom exceptions for cookbook uploads.

Errors raised by the transport (``requests``) and by key parsing
(``cryptography``) are not wrapped; only the conditions this
package detects itself get their own classes.
"""
from typing import Optional, Union
from pathlib import Path

import requests


class UploaderException(Exception):
    """Base exception for all cookbook upload errors."""
    
    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class ConfigurationError(UploaderException):
    """Exception raised when upload or installer configuration cannot be resolved."""
    pass


class KeyReadError(ConfigurationError):
    """Exception raised when the signing key file cannot be read."""
    
    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        error_code: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            path: Path of the key file that failed to load
            error_code: Numeric error code (if available)
        """
        self.path = path
        super().__init__(message, error_code)


class UnsupportedInstallerError(ConfigurationError):
    """Exception raised when no installer kind matches a package source."""
    pass


class AssemblyError(UploaderException):
    """
    Exception raised when a build directory cannot be staged.
    
    The partially populated staging directory is left on disk.
    """
    
    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        staging_dir: Optional[Union[str, Path]] = None,
        error_code: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            path: File or directory that failed
            staging_dir: Staging directory left in place
            error_code: Numeric error code (if available)
        """
        self.path = path
        self.staging_dir = staging_dir
        super().__init__(message, error_code)


# Connection, TLS and timeout failures surface as raised by requests.
TransportError = requests.RequestException
