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

"""Host platform and CPU architecture detection, and release artifact selection."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from enum import Enum

from epinio_e2e.constants import (
    ARTIFACT_DARWIN_ARM64,
    ARTIFACT_DARWIN_X64,
    ARTIFACT_LINUX,
    ARTIFACT_WINDOWS,
    BINARY_NAME,
    WINDOWS_BINARY_NAME,
)
from epinio_e2e.errors import UnsupportedPlatformError


class Platform(str, Enum):
    """Operating systems with a published Epinio CLI artifact.

    Values follow ``sys.platform``.
    """

    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "win32"


class Arch(str, Enum):
    X64 = "x64"
    ARM64 = "arm64"


_ARCH_ALIASES = {
    "x64": Arch.X64,
    "x86_64": Arch.X64,
    "amd64": Arch.X64,
    "arm64": Arch.ARM64,
    "aarch64": Arch.ARM64,
}


@dataclass(frozen=True)
class Artifact:
    """A release artifact to download for one platform.

    Attributes:
        filename: Asset name on the release page.
        version: Release tag the asset belongs to.
    """

    filename: str
    version: str

    def url(self, base_url: str) -> str:
        """Build ``<base-url>/<version>/<filename>``."""
        return f"{base_url.rstrip('/')}/{self.version}/{self.filename}"


def detect_platform() -> str:
    """Return the raw host platform identifier (e.g. ``darwin``, ``linux``, ``win32``)."""
    return sys.platform


def detect_arch() -> str:
    """Return the host CPU architecture, normalised where it is recognised."""
    return normalize_arch(platform.machine())


def normalize_arch(arch: str) -> str:
    """Map machine names such as ``x86_64`` or ``aarch64`` onto ``x64``/``arm64``.

    Unrecognised names are returned lower-cased and unchanged.
    """
    arch = arch.strip().lower()
    alias = _ARCH_ALIASES.get(arch)
    return alias.value if alias else arch


def parse_platform(value: str | Platform) -> Platform:
    """Resolve a platform identifier.

    ``windows`` is accepted as an alias for ``win32``, and any ``linux*``
    value (older interpreters report ``linux2``) resolves to linux.

    Raises:
        UnsupportedPlatformError: If *value* is not darwin, linux, or windows.
    """
    if isinstance(value, Platform):
        return value
    normalized = value.strip().lower()
    if normalized == "windows":
        return Platform.WINDOWS
    if normalized.startswith("linux"):
        return Platform.LINUX
    try:
        return Platform(normalized)
    except ValueError:
        raise UnsupportedPlatformError(value) from None


def select_artifact(platform_id: str | Platform, arch: str, version: str) -> Artifact:
    """Select the release artifact for a platform and architecture.

    Darwin is the only platform with per-architecture builds: ``x64`` picks
    the Intel build and anything else the ARM build. Linux and Windows ship
    a single artifact each.

    Args:
        platform_id: Platform identifier, see :func:`parse_platform`.
        arch: CPU architecture, see :func:`normalize_arch`.
        version: Pinned release tag.

    Returns:
        The matching artifact.

    Raises:
        UnsupportedPlatformError: If the platform is not recognised.
    """
    target = parse_platform(platform_id)
    if target is Platform.DARWIN:
        if normalize_arch(arch) == Arch.X64.value:
            return Artifact(ARTIFACT_DARWIN_X64, version)
        return Artifact(ARTIFACT_DARWIN_ARM64, version)
    if target is Platform.LINUX:
        return Artifact(ARTIFACT_LINUX, version)
    return Artifact(ARTIFACT_WINDOWS, version)


def binary_filename(platform_id: str | Platform) -> str:
    """Name of the staged executable: ``epinio.exe`` on Windows, ``epinio`` elsewhere."""
    try:
        target = parse_platform(platform_id)
    except UnsupportedPlatformError:
        return BINARY_NAME
    return WINDOWS_BINARY_NAME if target is Platform.WINDOWS else BINARY_NAME
