"""Cookbook file tree model."""
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Optional, Tuple, Union
import os


@dataclass(frozen=True)
class CookbookFileTree:
    """
    Files making up a cookbook.
    
    Attributes:
        name: Cookbook name
        root_path: Directory the relative paths are resolved against
        files: POSIX-style paths relative to ``root_path``; directories are
            implied by the path prefixes
    
    Example:
        >>> tree = CookbookFileTree("apache2", "/repo/apache2",
        ...                         ("metadata.rb", "recipes/default.rb"))
        >>> tree.source_path("recipes/default.rb")
        PosixPath('/repo/apache2/recipes/default.rb')
    """
    name: str
    root_path: Union[str, Path]
    files: Tuple[str, ...] = field(default_factory=tuple)
    
    def __post_init__(self):
        if not self.name:
            raise ValueError("Cookbook name must not be empty")
        object.__setattr__(self, 'root_path', Path(self.root_path))
        object.__setattr__(self, 'files', tuple(self.files))
        for relative in self.files:
            path = PurePosixPath(relative)
            if path.is_absolute() or '..' in path.parts:
                raise ValueError(f"Cookbook file path must be relative: {relative}")
    
    def source_path(self, relative: str) -> Path:
        """Absolute on-disk path of a cookbook file."""
        return self.root_path.joinpath(*PurePosixPath(relative).parts)
    
    @classmethod
    def from_directory(
        cls,
        path: Union[str, Path],
        name: Optional[str] = None
    ) -> 'CookbookFileTree':
        """
        Build a tree from every regular file under ``path``.
        
        Dotfiles are included. The cookbook name defaults to the directory
        name.
        
        Raises:
            NotADirectoryError: If ``path`` is not a directory
        """
        root = Path(path)
        if not root.is_dir():
            raise NotADirectoryError(f"Cookbook directory not found: {root}")
        
        files = []
        for dirpath, _dirnames, filenames in os.walk(root):
            for filename in filenames:
                full = Path(dirpath) / filename
                if full.is_file():
                    files.append(full.relative_to(root).as_posix())
        
        return cls(name=name or root.resolve().name, root_path=root, files=tuple(sorted(files)))
    
    def __len__(self) -> int:
        return len(self.files)
