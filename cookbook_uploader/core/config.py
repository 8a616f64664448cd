"""
Uploader configuration module.

Configuration is an explicit value handed to the transport; nothing here
reads process-wide state.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Union
import logging
import ssl

from .exceptions import ConfigurationError


class SSLVerifyMode(str, Enum):
    """TLS peer verification modes."""

    VERIFY_NONE = 'verify_none'
    VERIFY_PEER = 'verify_peer'

    @classmethod
    def parse(cls, value: Union[str, 'SSLVerifyMode']) -> 'SSLVerifyMode':
        """Parse a mode name such as ``'verify_peer'`` or ``':verify_none'``."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lstrip(':').lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise ConfigurationError(
            f"Unknown ssl_verify_mode '{value}' "
            f"(expected one of: {', '.join(m.value for m in cls)})"
        )


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Attributes:
        verify_mode: Whether the server certificate is verified
        ca_file: Extra CA certificate file added to the platform trust store
    """
    verify_mode: SSLVerifyMode = SSLVerifyMode.VERIFY_PEER
    ca_file: Optional[str] = None

    def __post_init__(self):
        self.verify_mode = SSLVerifyMode.parse(self.verify_mode)

    @property
    def verify(self) -> bool:
        """True when the peer certificate must be verified."""
        return self.verify_mode is SSLVerifyMode.VERIFY_PEER

    @property
    def has_custom_trust_store(self) -> bool:
        """True when a custom CA file is configured."""
        return bool(self.ca_file)

    def create_ssl_context(self) -> ssl.SSLContext:
        """
        Build a trust store from the platform defaults plus ``ca_file``.

        Only called when a CA file is configured; otherwise the platform
        defaults are used untouched.
        """
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.set_default_verify_paths()
        if self.ca_file:
            context.load_verify_locations(cafile=self.ca_file)

        if not self.verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        return context


@dataclass
class UploaderConfig:
    """
    Complete uploader configuration.

    Attributes:
        ssl: TLS settings for https destinations
        timeout: Optional (connect, read) timeout in seconds; None blocks forever
        chef_version: Value sent in the X-Chef-Version header
        api_version: Server API version covered by the request signature
        user_agent: User-Agent header value
        extra_headers: Additional headers sent with every request
        log_level: Level applied by ``setup_logging`` in the CLI
    """
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: Optional[float] = None
    chef_version: str = '12.0.0'
    api_version: str = '0'
    user_agent: str = 'cookbook-uploader/1.0.0'
    extra_headers: Dict[str, str] = field(default_factory=dict)
    log_level: int = logging.INFO

    @classmethod
    def default(cls) -> 'UploaderConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def insecure(cls, **kwargs) -> 'UploaderConfig':
        """Create configuration with certificate verification disabled."""
        return cls(ssl=SSLConfig(verify_mode=SSLVerifyMode.VERIFY_NONE), **kwargs)

    @classmethod
    def with_ca_file(cls, ca_file: str, **kwargs) -> 'UploaderConfig':
        """Create configuration that trusts an extra CA certificate file."""
        return cls(ssl=SSLConfig(ca_file=ca_file), **kwargs)

    def default_headers(self) -> Dict[str, str]:
        """Headers sent with every request before signing headers are merged."""
        return {
            'Accept': 'application/json',
            'User-Agent': self.user_agent,
            'X-Chef-Version': self.chef_version,
            **self.extra_headers
        }
