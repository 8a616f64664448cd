"""Core components: multipart streaming, signing, transport and staging."""
from .config import UploaderConfig, SSLConfig, SSLVerifyMode
from .exceptions import (
    UploaderException,
    ConfigurationError,
    KeyReadError,
    UnsupportedInstallerError,
    AssemblyError,
    TransportError,
)

__all__ = [
    'UploaderConfig',
    'SSLConfig',
    'SSLVerifyMode',
    'UploaderException',
    'ConfigurationError',
    'KeyReadError',
    'UnsupportedInstallerError',
    'AssemblyError',
    'TransportError',
]
