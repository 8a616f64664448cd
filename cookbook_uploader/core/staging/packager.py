"""Cookbook tarball packaging."""
from pathlib import Path
from typing import Union
import tarfile

from ..exceptions import AssemblyError
from ..logging import get_logger

logger = get_logger('cookbook_uploader.staging')


class CookbookPackager:
    """Packs a staged cookbook into ``<staging>/<name>.tgz``."""
    
    EXTENSION = '.tgz'
    
    def package(self, staging_dir: Union[str, Path], cookbook_name: str) -> Path:
        """
        Create a gzipped tarball of ``<staging_dir>/<cookbook_name>``.
        
        Entries are stored under ``<cookbook_name>/``.
        
        Raises:
            AssemblyError: If the staged cookbook is missing or the
                tarball cannot be written
        """
        staging_dir = Path(staging_dir)
        source = staging_dir / cookbook_name
        tarball = staging_dir / f"{cookbook_name}{self.EXTENSION}"
        
        if not source.is_dir():
            raise AssemblyError(f"Staged cookbook not found: {source}", path=source, staging_dir=staging_dir)
        
        try:
            with tarfile.open(tarball, 'w:gz') as tar:
                tar.add(str(source), arcname=cookbook_name)
        except (OSError, tarfile.TarError) as e:
            raise AssemblyError(f"Cannot write {tarball}: {e}", path=tarball, staging_dir=staging_dir) from e
        
        logger.debug(f"Packaged {cookbook_name} to {tarball} ({tarball.stat().st_size} bytes)")
        return tarball
