"""
Path Composer
=============

Builds the PYTHONPATH pack tests run with: the platform's component
directories (when a platform repository is configured) followed by the
pack's sensors, actions and etc directories.
"""

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .config import COMPONENT_PREFIX, CONFIG_PATH_VAR
from .environment import RunContext
from .pack import PackLayout

logger = logging.getLogger(__name__)

PYTHONPATH_VAR = "PYTHONPATH"


@dataclass(frozen=True)
class SearchPath:
    """Ordered import search path, joined only when handed to a child process."""
    entries: Tuple[Path, ...]

    def __str__(self) -> str:
        return os.pathsep.join(str(entry) for entry in self.entries)

    def merged_with(self, existing: Optional[str]) -> str:
        """Existing value first, composed entries after it."""
        if existing:
            return os.pathsep.join([existing, str(self)])
        return str(self)


def discover_components(repo_path: Path, prefix: str = COMPONENT_PREFIX) -> List[Path]:
    """Immediate subdirectories of repo_path whose name starts with prefix, sorted by name."""
    if not repo_path.is_dir():
        logger.warning(f"Platform repository {repo_path} is not a directory, no components added")
        return []
    return sorted(
        (child for child in repo_path.iterdir() if child.is_dir() and child.name.startswith(prefix)),
        key=lambda child: child.name,
    )


class PathComposer:
    """Composes and exports the search path for one run."""

    def __init__(self, ctx: RunContext):
        self.ctx = ctx

    def compose(self, layout: PackLayout) -> SearchPath:
        entries: List[Path] = []
        repo_path = self.ctx.settings.platform_repo_path
        if repo_path is not None:
            entries.extend(discover_components(repo_path))
        entries.extend([layout.sensors_path, layout.actions_path, layout.etc_path])
        return SearchPath(tuple(entries))

    def export(self, search_path: SearchPath) -> None:
        self.ctx.set_var(PYTHONPATH_VAR, search_path.merged_with(self.ctx.env.get(PYTHONPATH_VAR)))
        logger.debug(f"{PYTHONPATH_VAR}={self.ctx.env[PYTHONPATH_VAR]}")

        tests_config = self.ctx.settings.platform_tests_config
        if tests_config is not None:
            self.ctx.set_var(CONFIG_PATH_VAR, str(tests_config))
            logger.debug(f"{CONFIG_PATH_VAR}={tests_config}")

    @contextmanager
    def exported(self, search_path: SearchPath) -> Iterator[SearchPath]:
        """Export search_path for the duration of the block, unset afterwards."""
        self.export(search_path)
        try:
            yield search_path
        finally:
            self.ctx.unset_var(PYTHONPATH_VAR, CONFIG_PATH_VAR)
