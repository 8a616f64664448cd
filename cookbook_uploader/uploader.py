"""
Cookbook site uploader.

Provides a simplified interface over staging, packaging and the signed
streaming transport.
"""
from pathlib import Path
from typing import Any, Mapping, Optional, Union
import json

import requests

from .core.config import UploaderConfig
from .core.logging import get_logger
from .core.staging import BuildDirectoryAssembler, CookbookFileTree, CookbookPackager
from .core.transport import UploadTransport

logger = get_logger('cookbook_uploader')

COOKBOOKS_ENDPOINT = '/api/v1/cookbooks'


class CookbookSiteUploader:
    """
    Entry point for sharing cookbooks with a cookbook site.

    Example:
        >>> uploader = CookbookSiteUploader(UploaderConfig.default())
        >>> tree = CookbookFileTree.from_directory("cookbooks/apache2")
        >>> response = uploader.share(
        ...     tree, "Web Servers",
        ...     "https://supermarket.example.com", "bill", "~/.chef/bill.pem"
        ... )
        >>> response.status_code
        201
    """

    def __init__(
        self,
        config: Optional[UploaderConfig] = None,
        transport: Optional[UploadTransport] = None,
        assembler: Optional[BuildDirectoryAssembler] = None,
        packager: Optional[CookbookPackager] = None
    ):
        """
        Args:
            config: Uploader configuration
            transport: Transport override (defaults to one built from config)
            assembler: Build directory assembler
            packager: Tarball packager
        """
        self._config = config or UploaderConfig.default()
        self._transport = transport or UploadTransport(self._config)
        self._assembler = assembler or BuildDirectoryAssembler()
        self._packager = packager or CookbookPackager()

    @property
    def config(self) -> UploaderConfig:
        return self._config

    def create_build_dir(self, cookbook: CookbookFileTree) -> Path:
        """Stage a cookbook in a temporary directory and return its path."""
        return self._assembler.assemble(cookbook)

    def make_request(
        self,
        method: str,
        uri: str,
        user_id: str,
        key_path: Union[str, Path],
        params: Optional[Mapping[str, Any]] = None
    ) -> requests.Response:
        """Send a signed ``post`` or ``put`` request, streaming ``params`` as multipart."""
        return self._transport.upload(method, uri, user_id, str(Path(key_path).expanduser()), params)

    def post(self, uri: str, user_id: str, key_path: Union[str, Path],
             params: Optional[Mapping[str, Any]] = None) -> requests.Response:
        return self.make_request('post', uri, user_id, key_path, params)

    def put(self, uri: str, user_id: str, key_path: Union[str, Path],
            params: Optional[Mapping[str, Any]] = None) -> requests.Response:
        return self.make_request('put', uri, user_id, key_path, params)

    def share(
        self,
        cookbook: CookbookFileTree,
        category: str,
        site_url: str,
        user_id: str,
        key_path: Union[str, Path]
    ) -> requests.Response:
        """
        Stage, package and upload a cookbook.

        The staging directory (holding the tarball) is left on disk.

        Args:
            cookbook: Cookbook to share
            category: Site category the cookbook is listed under
            site_url: Base URL of the cookbook site
            user_id: Site user name
            key_path: User's PEM private key

        Returns:
            The raw site response
        """
        logger.info(f"Sharing cookbook {cookbook.name} in category '{category}'")
        staging_dir = self.create_build_dir(cookbook)
        tarball = self._packager.package(staging_dir, cookbook.name)

        uri = site_url.rstrip('/') + COOKBOOKS_ENDPOINT
        with open(tarball, 'rb') as tarball_file:
            response = self.post(uri, user_id, key_path, {
                'tarball': tarball_file,
                'cookbook': json.dumps({'category': category}),
            })

        logger.info(f"Upload of {cookbook.name} finished with HTTP {response.status_code}")
        return response
