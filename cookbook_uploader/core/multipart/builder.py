"""
multipart/form-data framing.

Turns named request parameters into the ordered parts of a
``multipart/form-data`` body. Framing strings become StringParts and open
files become FileParts, so the Content-Length is known before a single byte
of the body is produced.
"""
from typing import Any, Dict, List, Mapping, Optional

from Crypto.Random import get_random_bytes

from .parts import Part, StringPart, FilePart
from .stream import MultipartStream

CRLF = '\r\n'
BOUNDARY_PREFIX = '----CookbookUploaderBoundary'


def generate_boundary() -> str:
    """Generate a random multipart boundary."""
    return f"{BOUNDARY_PREFIX}{get_random_bytes(8).hex()}ZZZZZ"


def is_file_like(value: Any) -> bool:
    """True for open file objects that can back a FilePart."""
    return hasattr(value, 'read') and hasattr(value, 'seek')


class MultipartBody:
    """
    A framed multipart/form-data body.

    Attributes:
        boundary: Boundary string (without the leading dashes)
        parts: Framing and payload parts in wire order
        file_parts: Payload parts backed by files, in parameter order
    """

    def __init__(self, boundary: str, parts: List[Part], file_parts: List[FilePart]):
        self.boundary = boundary
        self.parts = parts
        self.file_parts = file_parts

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        boundary: Optional[str] = None
    ) -> 'MultipartBody':
        """
        Frame request parameters.

        Args:
            params: Field name to value; file objects are sent as file
                uploads, anything else as text via ``str()``
            boundary: Boundary to use; generated when omitted

        Returns:
            The framed body
        """
        boundary = boundary or generate_boundary()
        parts: List[Part] = []
        file_parts: List[FilePart] = []

        for name, value in params.items():
            if is_file_like(value):
                file_part = FilePart(value)
                parts.append(StringPart(
                    f"--{boundary}{CRLF}"
                    f'Content-Disposition: form-data; name="{name}"; '
                    f'filename="{file_part.filename}"{CRLF}'
                    f"Content-Type: application/octet-stream{CRLF}{CRLF}"
                ))
                parts.append(file_part)
                parts.append(StringPart(CRLF))
                file_parts.append(file_part)
            else:
                if isinstance(value, bytes):
                    payload = value
                else:
                    payload = str(value).encode('utf-8')
                parts.append(StringPart(
                    f"--{boundary}{CRLF}"
                    f'Content-Disposition: form-data; name="{name}"{CRLF}{CRLF}'
                ))
                parts.append(StringPart(payload + CRLF.encode('ascii')))

        parts.append(StringPart(f"--{boundary}--{CRLF}"))
        return cls(boundary, parts, file_parts)

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def content_length(self) -> int:
        return sum(part.size for part in self.parts)

    def headers(self) -> Dict[str, str]:
        """Content-Type and Content-Length headers for this body."""
        return {
            'Content-Type': self.content_type,
            'Content-Length': str(self.content_length),
        }

    def stream(self) -> MultipartStream:
        """A fresh stream positioned at the start of the body."""
        return MultipartStream(self.parts)

    def signable_parts(self) -> List[Part]:
        """
        Parts covered by the request's content hash.

        When the body carries files the hash is taken over the last file's
        contents; otherwise over the whole framed body.
        """
        if self.file_parts:
            return [self.file_parts[-1]]
        return list(self.parts)
