import pytest
from pydantic import ValidationError

from epinio_e2e.config import InstallerConfig, ProvisionerConfig, SampleAppConfig
from epinio_e2e.constants import DEFAULT_SAMPLE_APP_PATH, dep_value


def test_provisioner_defaults(tmp_path):
    cfg = ProvisionerConfig(home_dir=tmp_path)

    assert cfg.version == "v0.5.0"
    assert cfg.releases_base_url == "https://github.com/epinio/epinio/releases/download"
    assert cfg.staging_dir == tmp_path / "epinio-tmp"
    assert cfg.teardown_max_attempts == 10


def test_provisioner_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("EPINIO_E2E_VERSION", "v1.2.3")
    monkeypatch.setenv("EPINIO_E2E_HOME_DIR", str(tmp_path))
    monkeypatch.setenv("EPINIO_E2E_STAGING_DIR_NAME", "epinio-ci")

    cfg = ProvisionerConfig()

    assert cfg.version == "v1.2.3"
    assert cfg.staging_dir == tmp_path / "epinio-ci"


@pytest.mark.parametrize("field, value", [("version", "latest"), ("teardown_max_attempts", 11)])
def test_provisioner_rejects_invalid_values(field, value):
    with pytest.raises(ValidationError):
        ProvisionerConfig(**{field: value})


def test_installer_defaults():
    cfg = InstallerConfig()

    assert cfg.repo_name == "epinio"
    assert cfg.repo_url == "https://epinio.github.io/helm-charts"
    assert cfg.release == "epinio-installer"
    assert cfg.chart == "epinio/epinio-installer"
    assert (cfg.install_timeout, cfg.uninstall_timeout) == ("25m", "20m")
    assert (cfg.ingress_service, cfg.ingress_namespace) == ("traefik", "kube-system")


def test_installer_rejects_bad_timeout():
    with pytest.raises(ValidationError):
        InstallerConfig(install_timeout="soon")


def test_sample_app_is_bundled():
    cfg = SampleAppConfig()
    assert cfg.app_path == DEFAULT_SAMPLE_APP_PATH
    assert (cfg.app_path / "index.php").is_file()


def test_dep_value():
    assert dep_value("epinio_cli", "version") == "v0.5.0"
    assert dep_value("epinio_cli", "missing", default="x") == "x"
    assert dep_value("epinio_cli", "version", "deeper", default=None) is None
