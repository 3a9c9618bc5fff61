"""Bundled asset loading.

Every asset is read exactly once, at startup, into an immutable
in-memory table keyed by file name. Handlers serve those bytes as-is;
nothing touches the filesystem while requests are being served.

By default the copies shipped inside the package (``perch/static``)
are used. Point ``AppConfig.asset_dir`` at a directory to serve other
files under the same names, e.g. the official htmx builds.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from types import MappingProxyType

from perch.errors import AssetError

logger = logging.getLogger("perch.assets")

# Every file the full route table references
ASSET_NAMES: tuple[str, ...] = (
    "index.html",
    "style.css",
    "404.html",
    "htmx.min.js",
    "sse.js",
    "ws.js",
    "yipee.gif",
)


class AssetBundle(Mapping[str, bytes]):
    """Immutable mapping of asset name to body bytes.

    Built by ``load_assets()``; the backing table is a read-only
    ``MappingProxyType`` so no handler can swap a body at runtime.
    """

    __slots__ = ("_assets", "_source")

    def __init__(self, assets: Mapping[str, bytes], source: str = "<memory>") -> None:
        self._assets = MappingProxyType(dict(assets))
        self._source = source

    def __getitem__(self, name: str) -> bytes:
        return self._assets[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def __repr__(self) -> str:
        return f"AssetBundle({sorted(self._assets)!r}, source={self._source!r})"

    @property
    def source(self) -> str:
        """Where the assets were read from (package data or a directory)."""
        return self._source

    @property
    def total_bytes(self) -> int:
        """Combined size of all loaded assets."""
        return sum(len(body) for body in self._assets.values())


def _bundled_root() -> Traversable:
    return resources.files("perch") / "static"


def _read(root: Traversable | Path, name: str) -> bytes:
    """Read one asset, refusing names that escape *root*."""
    if "/" in name or "\\" in name or name in ("", ".", ".."):
        msg = f"Invalid asset name {name!r}; assets are flat file names."
        raise AssetError(msg)

    entry = root / name
    try:
        return entry.read_bytes()
    except FileNotFoundError as exc:
        msg = f"Asset {name!r} not found in {root}"
        raise AssetError(msg) from exc
    except OSError as exc:
        msg = f"Could not read asset {name!r} from {root}: {exc}"
        raise AssetError(msg) from exc


def load_assets(
    directory: str | Path | None = None,
    names: Iterable[str] = ASSET_NAMES,
) -> AssetBundle:
    """Load *names* into an ``AssetBundle``.

    Args:
        directory: Directory to read from. ``None`` reads the package's
            bundled copies.
        names: Asset file names to load. Only the assets the selected
            routes reference need to exist.

    Raises:
        AssetError: If the directory does not exist or any asset is
            missing or unreadable. Startup should treat this as fatal.
    """
    if directory is None:
        root: Traversable | Path = _bundled_root()
        source = "perch/static"
    else:
        root = Path(directory).resolve()
        if not root.is_dir():
            msg = f"Asset directory {root} does not exist."
            raise AssetError(msg)
        source = str(root)

    loaded = {name: _read(root, name) for name in dict.fromkeys(names)}
    bundle = AssetBundle(loaded, source=source)
    logger.debug("Loaded %d assets (%d bytes) from %s", len(bundle), bundle.total_bytes, source)
    return bundle
