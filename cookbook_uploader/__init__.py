"""
cookbook_uploader - Streaming, signed cookbook uploads.

Usage:
    >>> from cookbook_uploader import CookbookSiteUploader, CookbookFileTree
    >>>
    >>> uploader = CookbookSiteUploader()
    >>> tree = CookbookFileTree.from_directory("cookbooks/apache2")
    >>> uploader.share(tree, "Web Servers", "https://supermarket.example.com",
    ...                "bill", "/home/bill/.chef/bill.pem")
"""
import logging
from .uploader import CookbookSiteUploader

# Configuration
from .core.config import UploaderConfig, SSLConfig, SSLVerifyMode

# Errors
from .core.exceptions import (
    UploaderException,
    ConfigurationError,
    KeyReadError,
    UnsupportedInstallerError,
    AssemblyError,
    TransportError,
)

# Building blocks
from .core.multipart import Part, StringPart, FilePart, MultipartStream, MultipartBody
from .core.signing import RequestSigner
from .core.staging import CookbookFileTree, BuildDirectoryAssembler, CookbookPackager
from .core.transport import UploadTransport
from .core.installer import InstallerKind, InstallerResolver

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for cookbook_uploader modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'cookbook_uploader',
        'cookbook_uploader.staging',
        'cookbook_uploader.signing',
        'cookbook_uploader.transport',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'CookbookSiteUploader',
    'UploaderConfig',
    'SSLConfig',
    'SSLVerifyMode',
    'UploaderException',
    'ConfigurationError',
    'KeyReadError',
    'UnsupportedInstallerError',
    'AssemblyError',
    'TransportError',
    'Part',
    'StringPart',
    'FilePart',
    'MultipartStream',
    'MultipartBody',
    'RequestSigner',
    'CookbookFileTree',
    'BuildDirectoryAssembler',
    'CookbookPackager',
    'UploadTransport',
    'InstallerKind',
    'InstallerResolver',
    'setup_logging',
]
