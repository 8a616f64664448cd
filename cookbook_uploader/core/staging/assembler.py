"""
Build directory assembly.

Copies a cookbook's files into a fresh temporary directory laid out as
``<staging>/<cookbook name>/<relative path>``, ready to be packaged.
"""
from pathlib import Path, PurePosixPath
from typing import Optional, Set, Union
import os
import shutil
import tempfile

from ..exceptions import AssemblyError
from ..logging import get_logger
from .models import CookbookFileTree

logger = get_logger('cookbook_uploader.staging')


class BuildDirectoryAssembler:
    """
    Stages cookbooks for packaging.
    
    Assembly is all-or-nothing: the first file that cannot be copied aborts
    it with AssemblyError. The staging directory, complete or partial, is
    never removed here; callers delete it once they are done with it.
    """
    
    def __init__(self, temp_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            temp_dir: Parent directory for staging directories; the system
                temp directory when omitted
        """
        self._temp_dir = temp_dir
    
    def assemble(self, cookbook: CookbookFileTree) -> Path:
        """
        Stage a cookbook.
        
        Args:
            cookbook: Cookbook file tree
            
        Returns:
            Path of the staging directory
            
        Raises:
            AssemblyError: If a directory cannot be created or a file copied
        """
        try:
            staging_dir = Path(tempfile.mkdtemp(
                prefix=f"chef-{cookbook.name}-build",
                dir=self._temp_dir
            ))
        except OSError as e:
            raise AssemblyError(f"Cannot create staging directory: {e}", path=self._temp_dir) from e
        
        logger.debug(f"Staging {cookbook.name} ({len(cookbook.files)} files) at {staging_dir}")
        cookbook_dir = staging_dir / cookbook.name
        self._make_directory(cookbook_dir, staging_dir)
        created: Set[Path] = {cookbook_dir}
        
        for relative in cookbook.files:
            source = cookbook.source_path(relative)
            destination = cookbook_dir.joinpath(*PurePosixPath(relative).parts)
            parent = destination.parent
        
            if parent not in created:
                self._make_directory(parent, staging_dir)
                created.add(parent)
        
            logger.debug(f"Staging {source} to {destination}")
            try:
                shutil.copy(source, destination)
            except OSError as e:
                raise AssemblyError(
                    f"Cannot stage {source}: {e}",
                    path=source,
                    staging_dir=staging_dir
                ) from e
        
        return staging_dir
    
    @staticmethod
    def _make_directory(path: Path, staging_dir: Path) -> None:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise AssemblyError(
                f"Cannot create directory {path}: {e}",
                path=path,
                staging_dir=staging_dir
            ) from e
