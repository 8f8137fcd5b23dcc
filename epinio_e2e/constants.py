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

"""Constants, dependency loading, and dep_value helper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

# -- Resolved paths --
PACKAGE_DIR = Path(__file__).resolve().parent
ASSETS_DIR = PACKAGE_DIR / "assets"


def load_dependencies() -> dict:
    """Load pinned versions and chart coordinates from dependencies.yaml.

    Returns:
        Parsed YAML content as a nested dictionary.
    """
    deps_file = PACKAGE_DIR / "dependencies.yaml"
    with open(deps_file) as f:
        return yaml.safe_load(f)


DEPENDENCIES = load_dependencies()


def dep_value(*keys: str, default: Any = None) -> Any:
    """Look up a pinned value in dependencies.yaml by key path.

    ``dep_value("epinio_cli", "version")`` gives the pinned CLI release and
    ``dep_value("epinio_installer", "repo_url")`` the chart repository.

    Args:
        *keys: Key path, e.g. ``("epinio_installer", "chart")``.
        default: Value to return if the path is missing or not a mapping.

    Returns:
        The value at the nested key path, or *default* if not found.
    """
    node = DEPENDENCIES
    for key in keys:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


# -- Epinio CLI release --
EPINIO_GITHUB_REPO = "epinio/epinio"
DEFAULT_EPINIO_VERSION = "v0.5.0"
DEFAULT_RELEASES_BASE_URL = f"https://github.com/{EPINIO_GITHUB_REPO}/releases/download"

# -- Release artifact names --
ARTIFACT_DARWIN_X64 = "epinio-darwin-x86_64"
ARTIFACT_DARWIN_ARM64 = "epinio-darwin-arm64"
ARTIFACT_LINUX = "epinio-linux-x86_64"
ARTIFACT_WINDOWS = "epinio-windows-amd64.exe"

# -- Staging directory --
DEFAULT_STAGING_DIR_NAME = "epinio-tmp"
BINARY_NAME = "epinio"
WINDOWS_BINARY_NAME = "epinio.exe"
WINDOWS_ARCHIVE_NAME = "epinio.zip"
EXECUTABLE_MODE = 0o755

# -- Teardown --
TEARDOWN_MAX_ATTEMPTS = 10
TEARDOWN_RETRY_WAIT_SECONDS = 0.1

# -- External tools --
TOOL_HELM = "helm"
TOOL_KUBECTL = "kubectl"
TOOL_CURL = "curl"
TOOL_UNZIP = "unzip"

# -- Helm --
DEFAULT_HELM_REPO_NAME = "epinio"
DEFAULT_HELM_REPO_URL = "https://epinio.github.io/helm-charts"
DEFAULT_HELM_RELEASE = "epinio-installer"
DEFAULT_HELM_CHART = "epinio/epinio-installer"
DEFAULT_INSTALL_TIMEOUT = "25m"
DEFAULT_UNINSTALL_TIMEOUT = "20m"
HELM_KEY_SKIP_TRAEFIK = "skipTraefik"
HELM_KEY_DOMAIN = "domain"

# -- Ingress discovery --
DEFAULT_INGRESS_SERVICE = "traefik"
NS_KUBE_SYSTEM = "kube-system"
DEFAULT_DOMAIN_SUFFIX = "omg.howdoi.website"
LOAD_BALANCER_LABEL = "LoadBalancer Ingress:"

# -- Sample application --
DEFAULT_SAMPLE_APP_NAME = "sample"
DEFAULT_SAMPLE_APP_PATH = ASSETS_DIR / "sample-app"

# -- Expected output phrases --
PHRASE_CLUSTER_RUNNING = "is running at "
PHRASE_EPINIO_VERSION = "Epinio Version"
PHRASE_REPO_ADDED = "has been added to your repositories"
PHRASE_DEPLOYED = "STATUS: deployed"
PHRASE_CONFIG_UPDATED = "Ok"
PHRASE_APP_ONLINE = "App is online."
PHRASE_SAMPLE_APP = "PHP Version"
