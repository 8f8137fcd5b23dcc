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

"""Install scenario subcommands (run, teardown)."""

from __future__ import annotations

import typer

from epinio_e2e.config import InstallerConfig, SampleAppConfig
from epinio_e2e.scenario import EpinioScenario

app = typer.Typer(help="Epinio install scenario.")


@app.command()
def run(
    skip_teardown: bool = typer.Option(
        False, "--skip-teardown", help="Keep the staged CLI and the installer release"),
    install_timeout: str | None = typer.Option(
        None, "--install-timeout", help="helm install timeout (e.g. 25m)"),
    app_name: str | None = typer.Option(
        None, "--app-name", help="Name of the pushed sample app"),
) -> None:
    """Provision the CLI, install Epinio, push the sample app, and check it is reachable."""
    installer_cfg = InstallerConfig()
    if install_timeout is not None:
        installer_cfg = installer_cfg.model_copy(update={"install_timeout": install_timeout})
    app_cfg = SampleAppConfig()
    if app_name is not None:
        app_cfg = app_cfg.model_copy(update={"app_name": app_name})

    EpinioScenario(installer_cfg=installer_cfg, app_cfg=app_cfg).run(teardown=not skip_teardown)


@app.command()
def teardown() -> None:
    """Remove the staged CLI and uninstall the installer release."""
    EpinioScenario().teardown()
