"""
Upload transport.

Frames the multipart body, signs the request and sends it in one blocking
call. The response is returned as received; interpreting it is up to the
caller.
"""
from pathlib import Path
from typing import Any, Mapping, Optional, Union
import time

import requests

from ..config import UploaderConfig
from ..logging import get_logger
from ..multipart import MultipartBody
from ..signing import RequestSigner
from .session_factory import SessionFactory

logger = get_logger('cookbook_uploader.transport')

SUPPORTED_METHODS = ('post', 'put')


class UploadTransport:
    """
    Sends signed, streamed multipart requests.

    Each call opens its own session and closes it when the response has been
    read. Connection, TLS and key errors propagate unchanged and nothing is
    retried. Redirects are returned to the caller, not followed.
    """

    def __init__(
        self,
        config: Optional[UploaderConfig] = None,
        signer: Optional[RequestSigner] = None,
        session_factory: Optional[SessionFactory] = None
    ):
        """
        Args:
            config: Uploader configuration (TLS mode, CA file, headers)
            signer: Request signer; built from the config when omitted
            session_factory: Factory for HTTP sessions
        """
        self._config = config or UploaderConfig.default()
        self._signer = signer or RequestSigner(api_version=self._config.api_version)
        self._session_factory = session_factory or SessionFactory()

    @property
    def config(self) -> UploaderConfig:
        return self._config

    @staticmethod
    def _normalize_method(method: str) -> str:
        normalized = str(method).lstrip(':').lower()
        if normalized not in SUPPORTED_METHODS:
            raise ValueError(
                f"Unsupported upload method '{method}' "
                f"(expected one of: {', '.join(SUPPORTED_METHODS)})"
            )
        return normalized

    def upload(
        self,
        method: str,
        uri: str,
        user_id: str,
        key_path: Union[str, Path],
        params: Optional[Mapping[str, Any]] = None
    ) -> requests.Response:
        """
        Send a signed request.

        Args:
            method: ``'post'`` or ``'put'``
            uri: Absolute http(s) URL
            user_id: User the signing key belongs to
            key_path: Path to the PEM private key
            params: Form fields; open file objects are sent as file uploads.
                The files must stay open until this call returns.

        Returns:
            The raw response

        Raises:
            ValueError: If the method is not supported
            KeyReadError: If the key file cannot be read
            requests.RequestException: On connection or TLS failures
        """
        method = self._normalize_method(method)
        headers = self._config.default_headers()

        data = None
        signable = None
        if params:
            body = MultipartBody.from_params(params)
            headers.update(body.headers())
            data = body.stream()
            signable = body.signable_parts()

        headers.update(self._signer.sign(method, uri, user_id, key_path, signable))

        session = self._session_factory.create_session(uri, self._config.ssl)
        body_size = data.size if data is not None else 0
        logger.debug(f"{method.upper()} {uri} ({body_size} bytes)")

        started = time.time()
        try:
            response = session.request(
                method.upper(),
                uri,
                data=data,
                headers=headers,
                timeout=self._config.timeout,
                # CA bundle environment variables must not override the configured mode
                verify=session.verify,
                # A 3xx is handed back to the caller; the stream cannot be replayed
                allow_redirects=False
            )
        finally:
            session.close()

        logger.debug(
            f"{method.upper()} {uri} -> {response.status_code} "
            f"in {time.time() - started:.2f}s"
        )
        return response
