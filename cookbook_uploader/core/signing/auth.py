"""Signed header authentication (protocol version 1.3)."""
from dataclasses import dataclass
from typing import Dict, List
import base64
import re

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

SIGN_VERSION = '1.3'
SIGN_ALGORITHM = 'sha256'
AUTHORIZATION_LINE_LENGTH = 60


def canonical_path(path: str) -> str:
    """Collapse repeated slashes and drop a trailing slash."""
    path = re.sub(r'/+', '/', path or '/')
    if len(path) > 1:
        path = path.rstrip('/')
    return path


def split_authorization(signature: str) -> List[str]:
    """Split a base64 signature into header-sized lines."""
    return [
        signature[i:i + AUTHORIZATION_LINE_LENGTH]
        for i in range(0, len(signature), AUTHORIZATION_LINE_LENGTH)
    ]


@dataclass(frozen=True)
class SignedHeaderAuth:
    """
    Fields covered by a request signature.

    Attributes:
        http_method: Request method (any case)
        path: Request path, without query string
        content_hash: Base64 SHA-256 digest of the signed content
        timestamp: ISO-8601 UTC timestamp
        user_id: Client or user name
        server_api_version: Server API version advertised by the client
    """
    http_method: str
    path: str
    content_hash: str
    timestamp: str
    user_id: str
    server_api_version: str = '0'

    def canonical_request(self) -> bytes:
        """The newline-joined string that gets signed."""
        return '\n'.join([
            f"Method:{self.http_method.upper()}",
            f"Path:{canonical_path(self.path)}",
            f"X-Ops-Content-Hash:{self.content_hash}",
            f"X-Ops-Sign:version={SIGN_VERSION}",
            f"X-Ops-Timestamp:{self.timestamp}",
            f"X-Ops-UserId:{self.user_id}",
            f"X-Ops-Server-API-Version:{self.server_api_version}",
        ]).encode('utf-8')

    def sign(self, private_key: rsa.RSAPrivateKey) -> Dict[str, str]:
        """
        Sign the canonical request.

        Args:
            private_key: RSA private key

        Returns:
            Authentication headers, including X-Ops-Authorization-1..N
        """
        signature = private_key.sign(
            self.canonical_request(),
            padding.PKCS1v15(),
            hashes.SHA256()
        )
        encoded = base64.b64encode(signature).decode('ascii')

        headers = {
            'X-Ops-Sign': f"algorithm={SIGN_ALGORITHM};version={SIGN_VERSION};",
            'X-Ops-Userid': self.user_id,
            'X-Ops-Timestamp': self.timestamp,
            'X-Ops-Content-Hash': self.content_hash,
            'X-Ops-Server-API-Version': self.server_api_version,
        }
        for index, line in enumerate(split_authorization(encoded), start=1):
            headers[f"X-Ops-Authorization-{index}"] = line
        return headers
