"""
Request signing service.

Builds the authentication headers for a request from its method, path,
user and body, using a private key read from disk.
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, Optional, Union
from urllib.parse import urlparse
import base64
import hashlib

from cryptography.hazmat.primitives import serialization

from ..exceptions import KeyReadError
from ..logging import get_logger
from ..multipart.parts import Part
from .auth import SignedHeaderAuth

logger = get_logger('cookbook_uploader.signing')

HASH_BLOCK_SIZE = 64 * 1024


def load_private_key(key_path: Union[str, Path]):
    """
    Load a PEM private key.

    Raises:
        KeyReadError: If the file cannot be read. Errors parsing the key
            itself are raised by ``cryptography`` unchanged.
    """
    try:
        with open(key_path, 'rb') as f:
            pem = f.read()
    except OSError as e:
        raise KeyReadError(f"Cannot read private key {key_path}: {e}", path=key_path) from e
    return serialization.load_pem_private_key(pem, password=None)


def canonical_time(moment: Optional[datetime] = None) -> str:
    """Format a moment as ``YYYY-MM-DDTHH:MM:SSZ``; naive values are taken as UTC."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def hash_parts(parts: Optional[Iterable[Part]]) -> str:
    """Base64 SHA-256 digest of the parts' bytes, read block by block."""
    digest = hashlib.sha256()
    for part in parts or ():
        offset = 0
        while offset < part.size:
            block = part.read(offset, HASH_BLOCK_SIZE)
            if not block:
                break
            digest.update(block)
            offset += len(block)
    return base64.b64encode(digest.digest()).decode('ascii')


class RequestSigner:
    """Signs requests with a user's private key."""

    def __init__(self, api_version: str = '0'):
        self._api_version = api_version

    def sign(
        self,
        method: str,
        uri: str,
        user_id: str,
        key_path: Union[str, Path],
        body: Optional[Iterable[Part]] = None,
        timestamp: Optional[Union[str, datetime]] = None
    ) -> Dict[str, str]:
        """
        Compute authentication headers.

        Args:
            method: HTTP method
            uri: Absolute request URI; only its path is signed
            user_id: User the key belongs to
            key_path: Path to the PEM private key
            body: Parts whose bytes make up the signed content
            timestamp: Fixed timestamp (string or datetime); now when omitted

        Returns:
            Header name to value mapping

        Raises:
            KeyReadError: If the key file cannot be read
        """
        private_key = load_private_key(key_path)

        if not isinstance(timestamp, str):
            timestamp = canonical_time(timestamp)

        auth = SignedHeaderAuth(
            http_method=method,
            path=urlparse(uri).path,
            content_hash=hash_parts(body),
            timestamp=timestamp,
            user_id=user_id,
            server_api_version=self._api_version,
        )
        logger.debug(
            f"Signing: method={method.upper()}, uri={uri}, user={user_id}, "
            f"timestamp={timestamp}"
        )
        return auth.sign(private_key)
