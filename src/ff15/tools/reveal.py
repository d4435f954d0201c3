"""
File manager integration for the ff15 file finder.

A revealer opens the host file manager on the folder containing a file, with
the file selected. The launched process is not waited on; finished file manager
processes are reaped before the next launch.
"""

import os
import sys
import subprocess
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..errors import RevealError, UnsupportedPlatformError
from ..models.config import FileManagerConfig


logger = logging.getLogger(__name__)


class FileRevealer(ABC):
    """Capability to show a file in the host file manager."""

    name = "file manager"

    def __init__(self):
        self._children: List[subprocess.Popen] = []

    @abstractmethod
    def build_command(self, path: str) -> List[str]:
        """Build the argument list that reveals ``path``."""

    def reveal(self, path: str) -> None:
        """
        Open the containing folder of a file with the file selected.

        Args:
            path: Path of the file to reveal

        Raises:
            RevealError: If the file manager could not be started
        """
        command = self.build_command(path)
        self.reap()
        logger.info(f"Revealing {path} with {self.name}: {command}")
        try:
            self._children.append(subprocess.Popen(command))
        except OSError as e:
            raise RevealError(str(e), path=path) from e

    def reap(self) -> int:
        """
        Collect file manager processes that have exited.

        Returns:
            Number of launched processes still running
        """
        self._children = [child for child in self._children if child.poll() is None]
        return len(self._children)


class ExplorerRevealer(FileRevealer):
    """Windows Explorer, using its ``/select,`` switch."""

    name = "explorer"

    def build_command(self, path: str) -> List[str]:
        return ["explorer", "/select,", path]


class FinderRevealer(FileRevealer):
    """macOS Finder through ``open -R``."""

    name = "finder"

    def build_command(self, path: str) -> List[str]:
        return ["open", "-R", path]


class CommandRevealer(FileRevealer):
    """
    User-configured command.

    ``{path}`` in any argument is replaced by the file path and ``{folder}``
    by the directory containing it.
    """

    name = "custom command"

    def __init__(self, command: List[str]):
        super().__init__()
        self.command = list(command)

    def build_command(self, path: str) -> List[str]:
        folder = os.path.dirname(path)
        return [arg.replace('{path}', path).replace('{folder}', folder) for arg in self.command]


class UnsupportedRevealer(FileRevealer):
    """Placeholder for platforms without a known file manager."""

    name = "unsupported"

    def __init__(self, platform: str):
        super().__init__()
        self.platform = platform

    def build_command(self, path: str) -> List[str]:
        raise UnsupportedPlatformError(
            f"Revealing files is not supported on platform '{self.platform}'", path=path
        )


def get_revealer(config: Optional[FileManagerConfig] = None,
                 platform: Optional[str] = None) -> FileRevealer:
    """
    Pick the revealer for the current platform.

    Args:
        config: File manager configuration; a custom command wins over the platform default
        platform: Platform identifier as in ``sys.platform`` (defaults to the running one)

    Returns:
        A FileRevealer; on unsupported platforms its ``reveal`` raises UnsupportedPlatformError
    """
    if config is not None and config.has_custom_command():
        return CommandRevealer(config.command)

    platform = platform or sys.platform
    if platform.startswith('win') or platform == 'cygwin':
        return ExplorerRevealer()
    if platform == 'darwin':
        return FinderRevealer()

    logger.debug(f"No file manager integration for platform {platform}")
    return UnsupportedRevealer(platform)
