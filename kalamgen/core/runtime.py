"""
Runtime support files shipped with the package.

Languages that need a shared transport file next to the generated stubs
name it through ``CodeGenerator.runtime_asset``; the bytes are copied into
the output set unchanged.
"""

from pathlib import Path
from typing import Dict, List, Optional

from ..logging_config import get_logger
from .generator import GeneratedFile, GeneratorError

logger = get_logger(__name__)

RUNTIME_DIR = Path(__file__).parent.parent / "runtime"


class RuntimeAssetError(GeneratorError):
    """The bundled runtime file could not be read."""

    pass


class RuntimeBundler:
    """Reads runtime assets, caching their bytes for the process lifetime."""

    def __init__(self, runtime_dir: Optional[Path] = None):
        self.runtime_dir = runtime_dir or RUNTIME_DIR
        self._cache: Dict[str, bytes] = {}

    def read(self, asset: str) -> bytes:
        """
        Return the raw bytes of a runtime asset.

        Raises:
            RuntimeAssetError: If the asset is missing or unreadable
        """
        if asset not in self._cache:
            path = self.runtime_dir / asset
            try:
                self._cache[asset] = path.read_bytes()
            except OSError as e:
                available = ", ".join(self.available()) or "none"
                raise RuntimeAssetError(
                    f"Cannot read runtime asset {asset} from {self.runtime_dir}: {e} "
                    f"(available: {available})"
                ) from e
        return self._cache[asset]

    def bundle(self, asset: str, output_name: Optional[str] = None) -> GeneratedFile:
        """Wrap an asset as an output file, optionally under another name."""
        content = self.read(asset)
        name = output_name or asset
        logger.debug("Bundling runtime %s as %s (%d bytes)", asset, name, len(content))
        return GeneratedFile(name, content)

    def available(self) -> List[str]:
        """Names of the asset files present in the runtime directory."""
        if not self.runtime_dir.is_dir():
            return []
        return sorted(p.name for p in self.runtime_dir.iterdir() if p.is_file())


_bundler: Optional[RuntimeBundler] = None


def get_runtime_bundler() -> RuntimeBundler:
    """Get the shared bundler instance."""
    global _bundler
    if _bundler is None:
        _bundler = RuntimeBundler()
    return _bundler
