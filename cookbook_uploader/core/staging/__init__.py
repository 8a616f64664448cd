"""Cookbook staging and packaging."""
from .models import CookbookFileTree
from .assembler import BuildDirectoryAssembler
from .packager import CookbookPackager

__all__ = [
    'CookbookFileTree',
    'BuildDirectoryAssembler',
    'CookbookPackager',
]
