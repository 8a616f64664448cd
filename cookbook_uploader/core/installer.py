"""
Installer kind dispatch for package sources.

Resolves which installer handles a package source, from an explicit type
or the file extension. Unknown kinds raise instead of falling through.
"""
from enum import Enum
from functools import cached_property
from pathlib import Path, PurePosixPath
from typing import Optional, Union
from urllib.parse import urlsplit, unquote
import tempfile

from .exceptions import UnsupportedInstallerError

URL_SCHEMES = ('http', 'https', 'ftp', 'file')


class InstallerKind(str, Enum):
    """Supported installer kinds."""

    MSI = 'msi'


def is_url(source: Optional[str]) -> bool:
    """True when ``source`` is an http, https, ftp or file URL."""
    if not source:
        return False
    try:
        scheme = urlsplit(source).scheme
    except ValueError:
        return False
    return scheme.lower() in URL_SCHEMES


class InstallerResolver:
    """
    Resolves the installer for one package.

    Both the kind and the local source location are computed on first
    access and cached for the resolver's lifetime.
    """

    def __init__(
        self,
        name: str,
        source: str,
        installer_type: Optional[Union[str, InstallerKind]] = None,
        cache_dir: Optional[Union[str, Path]] = None
    ):
        """
        Args:
            name: Package name (used in error messages)
            source: Local path or URL of the installer
            installer_type: Explicit installer kind, overriding the extension
            cache_dir: Directory downloaded installers are stored under
        """
        self.name = name
        self.source = source
        self.installer_type = installer_type
        self.cache_dir = Path(cache_dir) if cache_dir else Path(tempfile.gettempdir())

    @cached_property
    def kind(self) -> InstallerKind:
        """
        The installer kind.

        Raises:
            UnsupportedInstallerError: If the explicit type is unknown or the
                extension does not map to a kind
        """
        if self.installer_type:
            kind_name = getattr(self.installer_type, 'value', self.installer_type)
            try:
                return InstallerKind(str(kind_name).lstrip(':').lower())
            except ValueError as e:
                raise UnsupportedInstallerError(
                    f"Unsupported installer_type '{self.installer_type}' for package '{self.name}'"
                ) from e

        path = urlsplit(self.source).path if is_url(self.source) else self.source
        extension = PurePosixPath(path).suffix.lstrip('.').lower()
        try:
            return InstallerKind(extension)
        except ValueError:
            raise UnsupportedInstallerError(
                f"Installer type for package '{self.name}' not specified and cannot be "
                f"determined from file extension '{extension}'"
            ) from None

    @cached_property
    def source_location(self) -> Path:
        """Where the installer lives on disk (download target for URLs)."""
        if is_url(self.source):
            filename = PurePosixPath(unquote(urlsplit(self.source).path)).name
            return self.cache_dir / 'package' / filename
        return Path(self.source)
