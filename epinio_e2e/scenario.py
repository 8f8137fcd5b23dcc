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

"""Epinio install scenario: provision the CLI, install Epinio, push and reach a sample app."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from rich.panel import Panel

from epinio_e2e import console, logger
from epinio_e2e.config import InstallerConfig, SampleAppConfig
from epinio_e2e.constants import (
    HELM_KEY_DOMAIN,
    HELM_KEY_SKIP_TRAEFIK,
    LOAD_BALANCER_LABEL,
    PHRASE_APP_ONLINE,
    PHRASE_CLUSTER_RUNNING,
    PHRASE_CONFIG_UPDATED,
    PHRASE_DEPLOYED,
    PHRASE_EPINIO_VERSION,
    PHRASE_REPO_ADDED,
    PHRASE_SAMPLE_APP,
)
from epinio_e2e.errors import UnexpectedOutputError
from epinio_e2e.outputs import parse_load_balancer_ip, require_match, require_phrase
from epinio_e2e.provisioner import BinaryProvisioner
from epinio_e2e.runner import CommandRunner
from epinio_e2e.tools import Curl, EpinioCli, Helm, Kubectl


class EpinioScenario:
    """Sequential end-to-end check of an Epinio install on the current cluster.

    Every step runs one tool, waits for it, and judges the result by a
    phrase in its output. Steps never run concurrently and nothing is
    retried.

    Args:
        provisioner: Stages the Epinio CLI; built from the environment if omitted.
        installer_cfg: Chart, timeout, and ingress settings.
        app_cfg: Sample workload settings.
        runner: Command runner shared by all tools; defaults to the provisioner's.
    """

    def __init__(
        self,
        provisioner: BinaryProvisioner | None = None,
        installer_cfg: InstallerConfig | None = None,
        app_cfg: SampleAppConfig | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        if runner is None:
            runner = provisioner.runner if provisioner is not None else CommandRunner()
        self.runner = runner
        self.provisioner = provisioner if provisioner is not None else BinaryProvisioner(runner=runner)
        self.installer_cfg = installer_cfg if installer_cfg is not None else InstallerConfig()
        self.app_cfg = app_cfg if app_cfg is not None else SampleAppConfig()
        self.helm = Helm(runner)
        self.kubectl = Kubectl(runner)
        self.curl = Curl(runner)
        self.epinio = EpinioCli(runner, self.provisioner.locate_binary())

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def setup(self) -> Path | None:
        """Stage the Epinio CLI for the host platform."""
        return self.provisioner.provision()

    def teardown(self) -> None:
        """Remove the staging directory, then uninstall the installer release."""
        console.print(Panel.fit("Tearing down Epinio", style="bold blue"))
        self.provisioner.teardown(uninstall=self.uninstall_epinio)
        console.print("[green]\u2705 Epinio torn down[/green]")

    def steps(self) -> list[tuple[str, Callable[[], str]]]:
        return [
            ("Check Kubernetes API is ready", self.check_cluster_ready),
            ("Verify Epinio CLI is installed", self.check_cli_installed),
            ("Add epinio-installer helm repository", self.add_helm_repository),
            ("Install epinio-installer", self.install_epinio),
            ("Update Epinio config certs", self.update_cli_config),
            ("Push sample app", self.push_sample_app),
            ("Verify sample app is reachable", self.verify_sample_app),
        ]

    def run(self, *, teardown: bool = True) -> None:
        """Set up, run every step in order, and tear down.

        Stops at the first failing step. Teardown runs even after a failure;
        a teardown error is then only logged so the step's error is the one raised.

        Raises:
            CommandExecutionError: If a tool fails.
            UnexpectedOutputError: If a tool's output lacks the expected phrase.
        """
        try:
            self.setup()
            for name, step in self.steps():
                console.print(Panel.fit(name, style="bold blue"))
                step()
                console.print(f"[green]\u2705 {name}[/green]")
        except Exception:
            if teardown:
                try:
                    self.teardown()
                except Exception:
                    logger.exception("Teardown failed after an earlier step failure")
            raise
        if teardown:
            self.teardown()

    # ========================================================================
    # Steps
    # ========================================================================

    def check_cluster_ready(self) -> str:
        output = self.kubectl.cluster_info()
        require_match(output, PHRASE_CLUSTER_RUNNING + ".", "cluster-info")
        return output

    def check_cli_installed(self) -> str:
        return require_phrase(self.epinio.version(), PHRASE_EPINIO_VERSION, "epinio version")

    def add_helm_repository(self) -> str:
        name = self.installer_cfg.repo_name
        output = self.helm.repo_add(name, self.installer_cfg.repo_url)
        return require_phrase(output, f'"{name}" {PHRASE_REPO_ADDED}', "helm repo add")

    def install_epinio(self) -> str:
        cfg = self.installer_cfg
        values = {
            HELM_KEY_SKIP_TRAEFIK: cfg.skip_traefik,
            HELM_KEY_DOMAIN: self.domain(),
        }
        output = self.helm.install(cfg.release, cfg.chart, values, wait=True, timeout=cfg.install_timeout)
        return require_phrase(output, PHRASE_DEPLOYED, "helm install")

    def update_cli_config(self) -> str:
        return require_phrase(self.epinio.config_update(), PHRASE_CONFIG_UPDATED, "epinio config update")

    def push_sample_app(self) -> str:
        output = self.epinio.push(self.app_cfg.app_name, self.app_cfg.app_path)
        return require_phrase(output, PHRASE_APP_ONLINE, "epinio push")

    def verify_sample_app(self) -> str:
        # The installer serves a self-signed certificate.
        output = self.curl.fetch(self.app_url(), insecure=True)
        return require_phrase(output, PHRASE_SAMPLE_APP, "sample app")

    def uninstall_epinio(self) -> str:
        cfg = self.installer_cfg
        return self.helm.uninstall(cfg.release, timeout=cfg.uninstall_timeout)

    # ========================================================================
    # Helpers
    # ========================================================================

    def load_balancer_ip(self) -> str:
        """Return the ingress load-balancer IP that the Epinio domain is built on.

        Raises:
            UnexpectedOutputError: If the service has no load-balancer address.
        """
        cfg = self.installer_cfg
        description = self.kubectl.describe_service(cfg.ingress_service, cfg.ingress_namespace)
        ip = parse_load_balancer_ip(description)
        if ip is None:
            logger.error("Cannot find load balancer IP address.")
            raise UnexpectedOutputError("load balancer ip", LOAD_BALANCER_LABEL, description)
        return ip

    def domain(self) -> str:
        return f"{self.load_balancer_ip()}.{self.installer_cfg.domain_suffix}"

    def app_url(self) -> str:
        return f"https://{self.app_cfg.app_name}.{self.domain()}"
