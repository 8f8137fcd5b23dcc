# /*
# Copyright 2026 The Epinio E2E Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Epinio CLI provisioning into a per-run staging directory."""

from __future__ import annotations

import shutil
import stat
from collections.abc import Callable
from pathlib import Path

from rich.panel import Panel
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from epinio_e2e import console, logger
from epinio_e2e.config import ProvisionerConfig
from epinio_e2e.constants import (
    BINARY_NAME,
    EXECUTABLE_MODE,
    TEARDOWN_MAX_ATTEMPTS,
    TEARDOWN_RETRY_WAIT_SECONDS,
    WINDOWS_ARCHIVE_NAME,
    WINDOWS_BINARY_NAME,
)
from epinio_e2e.errors import CommandExecutionError, DownloadError, UnsupportedPlatformError
from epinio_e2e.platforms import (
    Artifact,
    Platform,
    binary_filename,
    detect_arch,
    detect_platform,
    parse_platform,
    select_artifact,
)
from epinio_e2e.runner import CommandRunner
from epinio_e2e.tools import Curl, Unzip


def grant_execute(path: Path) -> int:
    """Add execute permission to *path* without clearing any existing bits.

    Args:
        path: File to update.

    Returns:
        The new permission bits.
    """
    mode = stat.S_IMODE(path.stat().st_mode) | EXECUTABLE_MODE
    path.chmod(mode)
    return mode


def remove_tree(
    path: Path,
    max_attempts: int = TEARDOWN_MAX_ATTEMPTS,
    wait_seconds: float = TEARDOWN_RETRY_WAIT_SECONDS,
) -> None:
    """Recursively delete *path*, retrying on transient filesystem errors.

    A process that has just exited may still hold a handle on the binary on
    some platforms, so removal is retried up to *max_attempts* times.

    Raises:
        OSError: The last removal error once all attempts are used up.
    """
    for attempt in Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_fixed(wait_seconds),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    ):
        with attempt:
            if path.exists():
                shutil.rmtree(path)


class BinaryProvisioner:
    """Stage the Epinio CLI matching the host platform.

    Args:
        config: Provisioning settings; loaded from the environment if omitted.
        runner: Command runner used for downloads and extraction.
        platform_id: Target platform; defaults to the host's.
        arch: Target CPU architecture; defaults to the host's.
    """

    def __init__(
        self,
        config: ProvisionerConfig | None = None,
        runner: CommandRunner | None = None,
        platform_id: str | None = None,
        arch: str | None = None,
    ) -> None:
        self.config = config if config is not None else ProvisionerConfig()
        self.runner = runner if runner is not None else CommandRunner()
        self.platform_id = platform_id or detect_platform()
        self.arch = arch or detect_arch()
        self._curl = Curl(self.runner)
        self._unzip = Unzip(self.runner)

    @property
    def staging_dir(self) -> Path:
        return self.config.staging_dir

    def ensure_staging_directory(self) -> Path:
        """Create the staging directory and any missing parents; safe to repeat."""
        self.staging_dir.mkdir(parents=True, exist_ok=True)
        return self.staging_dir

    def select_artifact(self, platform_id: str | None = None, arch: str | None = None) -> Artifact:
        """Select the pinned release artifact for a platform.

        Raises:
            UnsupportedPlatformError: If the platform is not darwin, linux, or windows.
        """
        return select_artifact(platform_id or self.platform_id, arch or self.arch, self.config.version)

    def locate_binary(self, platform_id: str | None = None) -> Path:
        """Return where the staged binary lives; existence is not checked."""
        return self.staging_dir / binary_filename(platform_id or self.platform_id)

    def provision(self, platform_id: str | None = None, arch: str | None = None) -> Path | None:
        """Download the Epinio CLI for a platform into the staging directory.

        On an unrecognised platform nothing is downloaded and None is
        returned; the missing binary then surfaces as a
        :class:`CommandExecutionError` when it is first invoked.

        Returns:
            Path of the staged executable, or None if the platform is unsupported.

        Raises:
            DownloadError: If the artifact cannot be downloaded.
            CommandExecutionError: If the Windows archive cannot be extracted.
        """
        platform_id = platform_id or self.platform_id
        try:
            artifact = self.select_artifact(platform_id, arch)
        except UnsupportedPlatformError as err:
            logger.error("%s", err)
            console.print(f"[red]\u274c {err}; skipping Epinio CLI download[/red]")
            return None

        console.print(Panel.fit(f"Installing Epinio CLI ({artifact.version})", style="bold blue"))
        staging_dir = self.ensure_staging_directory()
        url = artifact.url(self.config.releases_base_url)

        if parse_platform(platform_id) is Platform.WINDOWS:
            archive = staging_dir / WINDOWS_ARCHIVE_NAME
            self._download(url, archive)
            binary = self._unzip.extract(archive, WINDOWS_BINARY_NAME, staging_dir)
        else:
            binary = staging_dir / BINARY_NAME
            self._download(url, binary)
            mode = grant_execute(binary)
            logger.info("Set mode of %s to %o", binary, mode)

        console.print(f"[green]\u2705 Epinio CLI staged at {binary}[/green]")
        return binary

    def teardown(self, uninstall: Callable[[], object] | None = None) -> None:
        """Remove the staging directory, then run *uninstall* if given.

        The uninstall callback runs last; its errors propagate.
        """
        if self.staging_dir.exists():
            console.print(f"[yellow]\u2139\ufe0f  Removing {self.staging_dir}...[/yellow]")
            remove_tree(
                self.staging_dir,
                max_attempts=self.config.teardown_max_attempts,
                wait_seconds=self.config.teardown_retry_wait,
            )
        if uninstall is not None:
            uninstall()

    def _download(self, url: str, dest: Path) -> None:
        console.print(f"[yellow]\u2139\ufe0f  Downloading {url}[/yellow]")
        try:
            self._curl.download(url, dest)
        except CommandExecutionError as err:
            raise DownloadError.from_command_error(url, err) from err
