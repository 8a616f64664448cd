"""Request signing."""
from .auth import SignedHeaderAuth, canonical_path, split_authorization
from .signer import RequestSigner, load_private_key, canonical_time, hash_parts

__all__ = [
    'SignedHeaderAuth',
    'RequestSigner',
    'load_private_key',
    'canonical_time',
    'canonical_path',
    'hash_parts',
    'split_authorization',
]
