"""Pytest fixtures for cookbook_uploader tests."""
from datetime import datetime, timedelta, timezone

import pytest
import requests
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID


@pytest.fixture(scope="session")
def rsa_key():
    """Generates a 2048-bit RSA private key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def key_file(tmp_path, rsa_key):
    """Writes the RSA key as an unencrypted PEM file."""
    path = tmp_path / "bill.pem"
    path.write_bytes(rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    ))
    return path


@pytest.fixture
def ca_cert_file(tmp_path, rsa_key):
    """Writes a self-signed CA certificate named 'Test Upload CA'."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "Test Upload CA")])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(rsa_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(rsa_key, hashes.SHA256())
    )
    path = tmp_path / "ca.pem"
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    return path


@pytest.fixture
def cookbook_dir(tmp_path):
    """Creates a small cookbook on disk."""
    root = tmp_path / "repo" / "openldap"
    files = {
        "metadata.rb": b"name 'openldap'\nversion '1.0.0'\n",
        "README.md": b"# openldap\n",
        ".kitchen.yml": b"driver: vagrant\n",
        "recipes/default.rb": b"package 'slapd'\n",
        "recipes/server.rb": b"service 'slapd'\n",
        "templates/default/ldap.conf.erb": b"BASE <%= @base %>\n",
        "files/default/schema/custom.schema": b"\x00\x01\x02binary",
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


@pytest.fixture
def make_response():
    """Factory for canned HTTP responses."""
    def _make(status_code=200, content=b'{}', url="http://cookbooks.dummy.com/api/v1/cookbooks"):
        response = requests.Response()
        response.status_code = status_code
        response._content = content
        response.headers['Content-Type'] = 'application/json'
        response.url = url
        return response
    return _make
