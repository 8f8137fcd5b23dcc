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

"""Thin adapters over the external tools the scenario drives.

Each adapter only builds argument lists and hands them to a
:class:`~epinio_e2e.runner.CommandRunner`; deciding whether the output means
success lives in :mod:`epinio_e2e.outputs`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from epinio_e2e.constants import (
    TOOL_CURL,
    TOOL_HELM,
    TOOL_KUBECTL,
    TOOL_UNZIP,
)
from epinio_e2e.runner import CommandRunner


class Tool:
    """An external program run through a shared :class:`CommandRunner`."""

    executable: str = ""

    def __init__(self, runner: CommandRunner, executable: str | os.PathLike | None = None) -> None:
        self.runner = runner
        if executable is not None:
            self.executable = str(executable)

    def __call__(self, *args: str) -> str:
        return self.runner.run(self.executable, args)


def helm_set_args(values: Mapping[str, object]) -> list[str]:
    """Turn a mapping into repeated ``--set key=value`` arguments.

    Booleans are rendered lower-case, as helm expects.
    """
    set_args: list[str] = []
    for key, value in values.items():
        if isinstance(value, bool):
            value = str(value).lower()
        set_args += ["--set", f"{key}={value}"]
    return set_args


class Helm(Tool):
    executable = TOOL_HELM

    def repo_add(self, name: str, url: str) -> str:
        return self("repo", "add", name, url)

    def install(
        self,
        release: str,
        chart: str,
        values: Mapping[str, object] | None = None,
        *,
        wait: bool = True,
        timeout: str | None = None,
    ) -> str:
        """Install *chart* as *release* and return helm's release notes."""
        args = ["install", release, chart, *helm_set_args(values or {})]
        if wait:
            args.append("--wait")
        if timeout:
            args.append(f"--timeout={timeout}")
        return self(*args)

    def uninstall(self, release: str, timeout: str | None = None) -> str:
        args = ["uninstall", release]
        if timeout:
            args.append(f"--timeout={timeout}")
        return self(*args)


class Kubectl(Tool):
    executable = TOOL_KUBECTL

    def cluster_info(self) -> str:
        return self("cluster-info")

    def describe_service(self, name: str, namespace: str) -> str:
        return self("describe", "service", name, "--namespace", namespace)


class EpinioCli(Tool):
    """The provisioned Epinio CLI binary, addressed by path."""

    def version(self) -> str:
        return self("version")

    def config_update(self) -> str:
        return self("config", "update")

    def push(self, name: str, path: str | os.PathLike) -> str:
        return self("push", "--name", name, "--path", str(path))


class Curl(Tool):
    executable = TOOL_CURL

    def download(self, url: str, dest: str | os.PathLike) -> str:
        """Download *url* to *dest*, following redirects and failing on HTTP errors."""
        return self("--fail", "--location", url, "--output", str(dest))

    def fetch(self, url: str, *, insecure: bool = False) -> str:
        args = ["--fail"]
        if insecure:
            args.append("--insecure")
        return self(*args, url)


class Unzip(Tool):
    executable = TOOL_UNZIP

    def extract(self, archive: str | os.PathLike, entry: str, dest_dir: str | os.PathLike) -> Path:
        """Extract a single *entry* of *archive* into *dest_dir*, overwriting it.

        Returns:
            Path of the extracted file.
        """
        self("-o", str(archive), entry, "-d", str(dest_dir))
        return Path(dest_dir) / entry
