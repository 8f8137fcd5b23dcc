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

"""Epinio CLI binary subcommands (provision, locate, remove)."""

from __future__ import annotations

import typer

from epinio_e2e import console
from epinio_e2e.config import ProvisionerConfig
from epinio_e2e.provisioner import BinaryProvisioner

app = typer.Typer(help="Manage the staged Epinio CLI binary.")


def _provisioner(
    platform_id: str | None = None,
    arch: str | None = None,
    version: str | None = None,
) -> BinaryProvisioner:
    cfg = ProvisionerConfig()
    if version is not None:
        cfg = cfg.model_copy(update={"version": version})
    return BinaryProvisioner(cfg, platform_id=platform_id, arch=arch)


@app.command()
def provision(
    platform_id: str | None = typer.Option(None, "--platform", help="Target platform (darwin, linux, win32)"),
    arch: str | None = typer.Option(None, "--arch", help="Target CPU architecture (x64, arm64)"),
    version: str | None = typer.Option(None, "--version", help="Epinio release tag"),
) -> None:
    """Download the Epinio CLI into the staging directory."""
    binary = _provisioner(platform_id, arch, version).provision()
    if binary is None:
        raise typer.Exit(code=1)


@app.command()
def locate(
    platform_id: str | None = typer.Option(None, "--platform", help="Target platform (darwin, linux, win32)"),
) -> None:
    """Print where the staged Epinio CLI lives."""
    typer.echo(_provisioner(platform_id).locate_binary())


@app.command()
def remove() -> None:
    """Delete the staging directory."""
    provisioner = _provisioner()
    provisioner.teardown()
    console.print(f"[green]\u2705 Removed {provisioner.staging_dir}[/green]")
