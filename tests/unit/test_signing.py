"""Tests for request signing."""
import base64
import hashlib
from datetime import datetime, timezone

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from cookbook_uploader.core.exceptions import KeyReadError, ConfigurationError
from cookbook_uploader.core.multipart import StringPart
from cookbook_uploader.core.signing import (
    RequestSigner,
    SignedHeaderAuth,
    load_private_key,
    canonical_time,
    canonical_path,
    hash_parts,
    split_authorization,
)

URI = "http://cookbooks.dummy.com/api/v1/cookbooks"
TIMESTAMP = "2013-06-01T12:00:00Z"


def authorization(headers):
    lines = [
        headers[f"X-Ops-Authorization-{i}"]
        for i in range(1, len(headers) + 1)
        if f"X-Ops-Authorization-{i}" in headers
    ]
    return "".join(lines)


class TestHelpers:
    """Test suite for signing helpers."""
    
    def test_canonical_time(self):
        moment = datetime(2013, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
        
        assert canonical_time(moment) == TIMESTAMP
    
    def test_canonical_time_naive_is_utc(self):
        assert canonical_time(datetime(2013, 6, 1, 12, 0, 0)) == TIMESTAMP
    
    def test_canonical_time_defaults_to_now(self):
        assert canonical_time().endswith("Z")
    
    @pytest.mark.parametrize("path,expected", [
        ("/api/v1/cookbooks", "/api/v1/cookbooks"),
        ("/api//v1///cookbooks/", "/api/v1/cookbooks"),
        ("/", "/"),
        ("", "/"),
    ])
    def test_canonical_path(self, path, expected):
        assert canonical_path(path) == expected
    
    def test_hash_parts(self):
        parts = [StringPart("stream1"), StringPart("stream2")]
        expected = base64.b64encode(hashlib.sha256(b"stream1stream2").digest()).decode()
        
        assert hash_parts(parts) == expected
    
    def test_hash_of_no_body(self):
        expected = base64.b64encode(hashlib.sha256(b"").digest()).decode()
        
        assert hash_parts(None) == expected
    
    def test_split_authorization(self):
        lines = split_authorization("a" * 130)
        
        assert [len(line) for line in lines] == [60, 60, 10]


class TestLoadPrivateKey:
    """Test suite for key loading."""
    
    def test_load(self, key_file, rsa_key):
        key = load_private_key(key_file)
        
        assert key.private_numbers() == rsa_key.private_numbers()
    
    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.pem"
        
        with pytest.raises(KeyReadError) as exc_info:
            load_private_key(missing)
        
        assert exc_info.value.path == missing
        assert isinstance(exc_info.value, ConfigurationError)
        assert isinstance(exc_info.value.__cause__, OSError)
    
    def test_malformed_key_propagates(self, tmp_path):
        """Test parse errors come from cryptography unchanged."""
        bad = tmp_path / "bad.pem"
        bad.write_bytes(b"not a key")
        
        with pytest.raises(ValueError) as exc_info:
            load_private_key(bad)
        
        assert not isinstance(exc_info.value, KeyReadError)


class TestSignedHeaderAuth:
    """Test suite for SignedHeaderAuth."""
    
    @pytest.fixture
    def auth(self):
        return SignedHeaderAuth(
            http_method="post",
            path="/api/v1/cookbooks",
            content_hash="HASH",
            timestamp=TIMESTAMP,
            user_id="bill",
        )
    
    def test_canonical_request(self, auth):
        assert auth.canonical_request() == (
            b"Method:POST\n"
            b"Path:/api/v1/cookbooks\n"
            b"X-Ops-Content-Hash:HASH\n"
            b"X-Ops-Sign:version=1.3\n"
            b"X-Ops-Timestamp:2013-06-01T12:00:00Z\n"
            b"X-Ops-UserId:bill\n"
            b"X-Ops-Server-API-Version:0"
        )
    
    def test_signature_verifies(self, auth, rsa_key):
        headers = auth.sign(rsa_key)
        signature = base64.b64decode(authorization(headers))
        
        rsa_key.public_key().verify(
            signature,
            auth.canonical_request(),
            padding.PKCS1v15(),
            hashes.SHA256()
        )
    
    def test_headers(self, auth, rsa_key):
        headers = auth.sign(rsa_key)
        
        assert headers["X-Ops-Sign"] == "algorithm=sha256;version=1.3;"
        assert headers["X-Ops-Userid"] == "bill"
        assert headers["X-Ops-Timestamp"] == TIMESTAMP
        assert headers["X-Ops-Content-Hash"] == "HASH"
        assert all(len(headers[f"X-Ops-Authorization-{i}"]) == 60 for i in range(1, 6))


class TestRequestSigner:
    """Test suite for RequestSigner."""
    
    @pytest.fixture
    def signer(self):
        return RequestSigner()
    
    def test_deterministic(self, signer, key_file):
        """Test identical inputs at the same timestamp give identical headers."""
        body = [StringPart("payload")]
        
        first = signer.sign("post", URI, "bill", key_file, body, timestamp=TIMESTAMP)
        second = signer.sign("post", URI, "bill", key_file, body, timestamp=TIMESTAMP)
        
        assert first == second
    
    @pytest.mark.parametrize("field,value", [
        ("method", "put"),
        ("uri", "http://cookbooks.dummy.com/api/v1/cookbooks/apache2"),
        ("user_id", "ted"),
        ("body", [StringPart("other payload")]),
        ("timestamp", "2013-06-01T12:00:01Z"),
    ])
    def test_changing_any_input_changes_signature(self, signer, key_file, field, value):
        base = {
            "method": "post",
            "uri": URI,
            "user_id": "bill",
            "key_path": key_file,
            "body": [StringPart("payload")],
            "timestamp": TIMESTAMP,
        }
        changed = dict(base, **{field: value})
        
        assert authorization(signer.sign(**base)) != authorization(signer.sign(**changed))
    
    def test_host_is_not_signed(self, signer, key_file):
        first = signer.sign("post", URI, "bill", key_file, timestamp=TIMESTAMP)
        second = signer.sign(
            "post", "https://other.example.com/api/v1/cookbooks", "bill", key_file,
            timestamp=TIMESTAMP
        )
        
        assert first == second
    
    def test_datetime_timestamp(self, signer, key_file):
        headers = signer.sign(
            "post", URI, "bill", key_file,
            timestamp=datetime(2013, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
        )
        
        assert headers["X-Ops-Timestamp"] == TIMESTAMP
    
    def test_api_version(self, key_file):
        headers = RequestSigner(api_version="1").sign("post", URI, "bill", key_file)
        
        assert headers["X-Ops-Server-API-Version"] == "1"
    
    def test_unreadable_key(self, signer, tmp_path):
        with pytest.raises(KeyReadError):
            signer.sign("post", URI, "bill", tmp_path / "missing.pem")
