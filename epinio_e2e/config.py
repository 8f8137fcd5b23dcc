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

"""Configuration classes for provisioning, installation, and the sample app."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from epinio_e2e.constants import (
    DEFAULT_DOMAIN_SUFFIX,
    DEFAULT_EPINIO_VERSION,
    DEFAULT_HELM_CHART,
    DEFAULT_HELM_RELEASE,
    DEFAULT_HELM_REPO_NAME,
    DEFAULT_HELM_REPO_URL,
    DEFAULT_INGRESS_SERVICE,
    DEFAULT_INSTALL_TIMEOUT,
    DEFAULT_RELEASES_BASE_URL,
    DEFAULT_SAMPLE_APP_NAME,
    DEFAULT_SAMPLE_APP_PATH,
    DEFAULT_STAGING_DIR_NAME,
    DEFAULT_UNINSTALL_TIMEOUT,
    NS_KUBE_SYSTEM,
    TEARDOWN_MAX_ATTEMPTS,
    TEARDOWN_RETRY_WAIT_SECONDS,
    dep_value,
)

_HELM_DURATION = r"^\d+[smh]$"


# ============================================================================
# Configuration classes
# ============================================================================

class ProvisionerConfig(BaseSettings):
    """Epinio CLI provisioning, auto-loaded from EPINIO_E2E_* env vars.

    Attributes:
        version: Pinned Epinio release tag to download.
        releases_base_url: Base URL of the GitHub release downloads.
        staging_dir_name: Name of the staging directory under ``home_dir``.
        home_dir: Directory the staging directory is created in.
        teardown_max_attempts: Removal attempts before teardown gives up.
        teardown_retry_wait: Seconds to wait between removal attempts.
    """

    model_config = SettingsConfigDict(env_prefix="EPINIO_E2E_", extra="ignore")

    version: str = Field(default=dep_value("epinio_cli", "version", default=DEFAULT_EPINIO_VERSION),
                         pattern=r"^v[\d.]+(-[\w.]+)?$")
    releases_base_url: str = DEFAULT_RELEASES_BASE_URL
    staging_dir_name: str = Field(default=DEFAULT_STAGING_DIR_NAME, min_length=1)
    home_dir: Path = Field(default_factory=Path.home)
    teardown_max_attempts: int = Field(default=TEARDOWN_MAX_ATTEMPTS, ge=1, le=TEARDOWN_MAX_ATTEMPTS)
    teardown_retry_wait: float = Field(default=TEARDOWN_RETRY_WAIT_SECONDS, ge=0)

    @property
    def staging_dir(self) -> Path:
        return self.home_dir / self.staging_dir_name


class InstallerConfig(BaseSettings):
    """Epinio installer chart and ingress settings, auto-loaded from EPINIO_E2E_* env vars.

    Attributes:
        repo_name: Name the chart repository is registered under.
        repo_url: URL of the chart repository.
        release: Helm release name for the installer.
        chart: Chart reference to install.
        install_timeout: Helm ``--timeout`` for the install.
        uninstall_timeout: Helm ``--timeout`` for the uninstall.
        skip_traefik: Whether the installer should skip deploying Traefik.
        domain_suffix: Wildcard DNS suffix appended to the load-balancer IP.
        ingress_service: Service whose load-balancer IP is used for the domain.
        ingress_namespace: Namespace of ``ingress_service``.
    """

    model_config = SettingsConfigDict(env_prefix="EPINIO_E2E_", extra="ignore")

    repo_name: str = dep_value("epinio_installer", "repo_name", default=DEFAULT_HELM_REPO_NAME)
    repo_url: str = dep_value("epinio_installer", "repo_url", default=DEFAULT_HELM_REPO_URL)
    release: str = DEFAULT_HELM_RELEASE
    chart: str = dep_value("epinio_installer", "chart", default=DEFAULT_HELM_CHART)
    install_timeout: str = Field(default=DEFAULT_INSTALL_TIMEOUT, pattern=_HELM_DURATION)
    uninstall_timeout: str = Field(default=DEFAULT_UNINSTALL_TIMEOUT, pattern=_HELM_DURATION)
    skip_traefik: bool = True
    domain_suffix: str = DEFAULT_DOMAIN_SUFFIX
    ingress_service: str = DEFAULT_INGRESS_SERVICE
    ingress_namespace: str = NS_KUBE_SYSTEM


class SampleAppConfig(BaseSettings):
    """Sample workload pushed through the Epinio CLI.

    Attributes:
        app_name: Application name passed to ``epinio push --name``.
        app_path: Source directory passed to ``epinio push --path``.
    """

    model_config = SettingsConfigDict(env_prefix="EPINIO_E2E_", extra="ignore")

    app_name: str = DEFAULT_SAMPLE_APP_NAME
    app_path: Path = DEFAULT_SAMPLE_APP_PATH
