#!/usr/bin/env python3
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

"""
cli.py - Epinio CLI provisioning and install scenario.

Subcommands:
    binary     Manage the staged Epinio CLI (provision, locate, remove)
    scenario   Run or tear down the Epinio install scenario

Examples:
    # Stage the Epinio CLI for this machine
    ./cli.py binary provision

    # Stage the darwin/arm64 build of a specific release
    ./cli.py binary provision --platform darwin --arch arm64 --version v0.5.0

    # Full install scenario against the current kube context
    ./cli.py scenario run

    # Clean up after a run with --skip-teardown
    ./cli.py scenario teardown

Settings can also be given as EPINIO_E2E_* environment variables.
"""

from __future__ import annotations

import logging
import sys

import typer

from epinio_e2e import console
from epinio_e2e.commands import binary_cmd, scenario_cmd

app = typer.Typer(
    help="Epinio CLI provisioning and install scenario.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.add_typer(binary_cmd.app, name="binary")
app.add_typer(scenario_cmd.app, name="scenario")


def main() -> None:
    try:
        app()
    except Exception as e:
        console.print(f"[red]\u274c {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
