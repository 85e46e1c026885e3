"""Partial template discovery and registration."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from jinja2 import DictLoader

from ..core.errors import PartialDirectoryError
from ..core.paths import canonical_file_path
from .io import read_text

logger = logging.getLogger(__name__)


def partial_name(file_path: Path, root: Path) -> str:
    """Derive the registered name of a partial from its path under ``root``.

    Args:
        file_path: Partial file
        root: Directory the partial was discovered in

    Returns:
        Relative POSIX path, extension included (e.g. ``nav/header.html``)
    """
    return file_path.relative_to(root).as_posix()


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def iter_partial_files(directory: Path) -> Iterator[Path]:
    """Yield partial files under ``directory`` in a stable order.

    Raises:
        PartialDirectoryError: If ``directory`` is not an existing directory
    """
    if not directory.is_dir():
        raise PartialDirectoryError(f"Partial directory not found: {directory}")

    for path in sorted(directory.rglob("*")):
        if path.is_file() and not _is_hidden(path, directory):
            yield path


class PartialRegistry:
    """Partials registered with the engine, plus the files they came from.

    The name -> source mapping backs a Jinja2 ``DictLoader``; the identity set
    holds the canonical path of every file ever registered and only grows.
    """

    def __init__(self) -> None:
        self._sources: dict[str, str] = {}
        self._origins: dict[str, str] = {}
        self._identities: set[str] = set()
        self.loader = DictLoader(self._sources)

    @property
    def identities(self) -> frozenset[str]:
        return frozenset(self._identities)

    @property
    def sources(self) -> Mapping[str, str]:
        return MappingProxyType(self._sources)

    def names(self) -> list[str]:
        return sorted(self._sources)

    def __contains__(self, path: object) -> bool:
        """Return True if ``path`` (already canonical) is a registered partial file."""
        return path in self._identities

    def register_file(self, file_path: Path, root: Path) -> str:
        """Register one partial, overwriting any earlier registration of its name.

        Raises:
            UnicodeDecodeError: If the file is not UTF-8 text; nothing is registered
        """
        source = read_text(file_path)
        name = partial_name(file_path, root)
        identity = canonical_file_path(file_path)

        previous = self._origins.get(name)
        if previous is not None and previous != identity:
            logger.debug(f"Partial {name!r} from {identity} shadows {previous}")

        self._sources[name] = source
        self._origins[name] = identity
        self._identities.add(identity)
        return name

    def register(self, directories: Path | str | Iterable[Path | str]) -> list[str]:
        """Discover and register every partial under the given directories.

        Args:
            directories: One directory or several; later ones win on name clashes

        Returns:
            Names registered by this call

        Raises:
            PartialDirectoryError: If any entry is not an existing directory
        """
        if isinstance(directories, (str, Path)):
            directories = [directories]

        roots = [Path(directory) for directory in directories]
        for root in roots:
            if not root.is_dir():
                raise PartialDirectoryError(f"Partial directory not found: {root}")

        registered = []
        for root in roots:
            for file_path in iter_partial_files(root):
                try:
                    registered.append(self.register_file(file_path, root))
                except UnicodeDecodeError:
                    logger.debug(f"Skipping non-text file in partial directory: {file_path}")
        logger.debug(f"Registered {len(registered)} partial(s) from {len(roots)} directory(ies)")
        return registered
