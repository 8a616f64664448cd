"""Session factory for upload connections."""
from typing import Optional
from urllib.parse import urlparse
import ssl

import requests
from requests.adapters import HTTPAdapter

from ..config import SSLConfig
from ..logging import get_logger

logger = get_logger('cookbook_uploader.transport')


class TrustStoreAdapter(HTTPAdapter):
    """HTTPS adapter that verifies servers against a prepared SSL context."""

    def __init__(self, ssl_context: ssl.SSLContext, **kwargs):
        self._ssl_context = ssl_context
        super().__init__(**kwargs)

    @property
    def ssl_context(self) -> ssl.SSLContext:
        return self._ssl_context

    def init_poolmanager(self, *args, **kwargs):
        kwargs['ssl_context'] = self._ssl_context
        return super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, *args, **kwargs):
        kwargs['ssl_context'] = self._ssl_context
        return super().proxy_manager_for(*args, **kwargs)


class SessionFactory:
    """Factory for creating one-shot upload sessions."""

    @staticmethod
    def is_secure(uri: str) -> bool:
        return urlparse(uri).scheme.lower() == 'https'

    @staticmethod
    def create_session(uri: str, ssl_config: Optional[SSLConfig] = None) -> requests.Session:
        """
        Create a session for a single upload to ``uri``.

        The session never retries. For https URIs the configured verify mode
        is applied; a trust store is built only when a CA file is
        configured, otherwise the platform defaults stay in effect.
        """
        ssl_config = ssl_config or SSLConfig()
        session = requests.Session()

        if not SessionFactory.is_secure(uri):
            return session

        session.verify = ssl_config.verify
        logger.debug(f"TLS verify mode for {urlparse(uri).hostname}: {ssl_config.verify_mode.value}")

        if ssl_config.has_custom_trust_store:
            logger.debug(f"Adding {ssl_config.ca_file} to the default trust store")
            session.mount('https://', TrustStoreAdapter(ssl_config.create_ssl_context()))

        return session
