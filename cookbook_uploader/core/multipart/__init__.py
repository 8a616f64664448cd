"""Streamed multipart/form-data bodies."""
from .parts import Part, StringPart, FilePart
from .stream import MultipartStream
from .builder import MultipartBody, generate_boundary, is_file_like

__all__ = [
    'Part',
    'StringPart',
    'FilePart',
    'MultipartStream',
    'MultipartBody',
    'generate_boundary',
    'is_file_like',
]
