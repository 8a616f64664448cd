"""HTTP(S) upload transport."""
from .session_factory import SessionFactory, TrustStoreAdapter
from .transport import UploadTransport, SUPPORTED_METHODS

__all__ = [
    'SessionFactory',
    'TrustStoreAdapter',
    'UploadTransport',
    'SUPPORTED_METHODS',
]
