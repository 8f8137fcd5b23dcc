from pathlib import Path

import pytest

from conftest import curl_writing, failing
from epinio_e2e.config import InstallerConfig, SampleAppConfig
from epinio_e2e.errors import CommandExecutionError, DownloadError, UnexpectedOutputError
from epinio_e2e.provisioner import BinaryProvisioner
from epinio_e2e.scenario import EpinioScenario

TRAEFIK = "Type:                     LoadBalancer\nLoadBalancer Ingress:     10.0.0.5\n"
DOMAIN = "10.0.0.5.omg.howdoi.website"


def _curl(args):
    if "--output" in args:
        return curl_writing()(args)
    return "<title>PHP 8.1.2 - phpinfo()</title><h1>PHP Version 8.1.2</h1>"


def _kubectl(args):
    if args == ["cluster-info"]:
        return "Kubernetes control plane is running at https://127.0.0.1:6443\n"
    return TRAEFIK


def _epinio(args):
    return {
        "version": "Epinio Version: v0.5.0\n",
        "config": "Updating the stored certificate from the current cluster\nOk\n",
        "push": "Pushing application code\nApp is online.\n",
    }[args[0]]


def _helm(args):
    if args[0] == "repo":
        return f'"{args[2]}" has been added to your repositories\n'
    if args[0] == "install":
        return "NAME: epinio-installer\nNAMESPACE: default\nSTATUS: deployed\nREVISION: 1\n"
    return 'release "epinio-installer" uninstalled\n'


@pytest.fixture
def scripted_runner(fake_runner):
    fake_runner.on("curl", _curl)
    fake_runner.on("kubectl", _kubectl)
    fake_runner.on("epinio", _epinio)
    fake_runner.on("helm", _helm)
    return fake_runner


@pytest.fixture
def scenario(provisioner_config, scripted_runner, tmp_path):
    provisioner = BinaryProvisioner(provisioner_config, scripted_runner, platform_id="linux", arch="x64")
    return EpinioScenario(
        provisioner,
        InstallerConfig(),
        SampleAppConfig(app_path=tmp_path / "sample-app"),
    )


def test_run_executes_steps_in_order(scenario, scripted_runner, tmp_path):
    binary = str(scenario.provisioner.locate_binary())

    scenario.run()

    assert scripted_runner.calls == [
        ("curl", ["--fail", "--location",
                  "https://github.com/epinio/epinio/releases/download/v0.5.0/epinio-linux-x86_64",
                  "--output", binary]),
        ("kubectl", ["cluster-info"]),
        (binary, ["version"]),
        ("helm", ["repo", "add", "epinio", "https://epinio.github.io/helm-charts"]),
        ("kubectl", ["describe", "service", "traefik", "--namespace", "kube-system"]),
        ("helm", ["install", "epinio-installer", "epinio/epinio-installer",
                  "--set", "skipTraefik=true", "--set", f"domain={DOMAIN}",
                  "--wait", "--timeout=25m"]),
        (binary, ["config", "update"]),
        (binary, ["push", "--name", "sample", "--path", str(tmp_path / "sample-app")]),
        ("kubectl", ["describe", "service", "traefik", "--namespace", "kube-system"]),
        ("curl", ["--fail", "--insecure", f"https://sample.{DOMAIN}"]),
        ("helm", ["uninstall", "epinio-installer", "--timeout=20m"]),
    ]
    assert not scenario.provisioner.staging_dir.exists()


def test_run_without_teardown_keeps_binary(scenario, scripted_runner):
    scenario.run(teardown=False)

    assert scenario.provisioner.locate_binary().exists()
    assert scripted_runner.calls[-1][0] == "curl"


def test_install_accepts_deployed_anywhere_in_output(scenario, scripted_runner):
    scripted_runner.on("helm", lambda args: "W0203 deprecated API\nSTATUS: deployed\nNOTES: enjoy\n")
    assert "STATUS: deployed" in scenario.install_epinio()


def test_failed_step_stops_run_and_still_tears_down(scenario, scripted_runner):
    def _helm_not_deployed(args):
        if args[0] == "install":
            return "STATUS: failed\n"
        return _helm(args)

    scripted_runner.on("helm", _helm_not_deployed)

    with pytest.raises(UnexpectedOutputError) as exc_info:
        scenario.run()

    assert exc_info.value.step == "helm install"
    executables = scripted_runner.executables()
    assert "push" not in [args[0] for _, args in scripted_runner.calls]
    assert executables[-1] == "helm"
    assert scripted_runner.calls[-1][1][0] == "uninstall"
    assert not scenario.provisioner.staging_dir.exists()


def test_tool_failure_propagates(scenario, scripted_runner):
    scripted_runner.on("kubectl", failing("kubectl", stderr="The connection to the server was refused"))

    with pytest.raises(CommandExecutionError) as exc_info:
        scenario.run(teardown=False)

    assert exc_info.value.stderr == "The connection to the server was refused"


def test_missing_load_balancer_ip(scenario, scripted_runner):
    scripted_runner.on("kubectl", lambda args: "Type:                     LoadBalancer\n")

    with pytest.raises(UnexpectedOutputError) as exc_info:
        scenario.install_epinio()

    assert exc_info.value.expected == "LoadBalancer Ingress:"
    assert all(args[0] != "install" for _, args in scripted_runner.calls)


def test_app_url(scenario):
    assert scenario.app_url() == f"https://sample.{DOMAIN}"


def test_unstaged_binary_fails_at_invocation(provisioner_config, fake_runner):
    provisioner = BinaryProvisioner(provisioner_config, fake_runner, platform_id="plan9", arch="x64")
    scenario = EpinioScenario(provisioner)
    fake_runner.on("epinio", failing(str(provisioner.locate_binary())))

    assert scenario.setup() is None
    with pytest.raises(CommandExecutionError):
        scenario.check_cli_installed()
    assert Path(fake_runner.calls[-1][0]) == provisioner.locate_binary()


def test_step_error_wins_over_teardown_error(scenario, scripted_runner, caplog):
    scripted_runner.on("kubectl", lambda args: "The connection to the server was refused\n")

    def _helm(args):
        if args[0] == "uninstall":
            raise CommandExecutionError(
                "helm", args, stderr="Error: uninstall: release: not found", exit_code=1)
        return ""

    scripted_runner.on("helm", _helm)

    with pytest.raises(UnexpectedOutputError) as exc_info:
        scenario.run()

    assert exc_info.value.step == "cluster-info"
    assert scripted_runner.calls[-1] == ("helm", ["uninstall", "epinio-installer", "--timeout=20m"])
    assert not scenario.provisioner.staging_dir.exists()
    assert "Teardown failed after an earlier step failure" in caplog.text


def test_teardown_error_raised_when_steps_pass(scenario, scripted_runner):
    def _helm_uninstall_fails(args):
        if args[0] == "uninstall":
            raise CommandExecutionError("helm", args, exit_code=1)
        return _helm(args)

    scripted_runner.on("helm", _helm_uninstall_fails)

    with pytest.raises(CommandExecutionError) as exc_info:
        scenario.run()

    assert exc_info.value.arguments[0] == "uninstall"


def test_failed_provisioning_still_tears_down(scenario, scripted_runner):
    def _curl_404(args):
        dest = Path(args[args.index("--output") + 1])
        dest.write_bytes(b"partial")
        raise CommandExecutionError(
            "curl", args, stderr="curl: (22) The requested URL returned error: 404", exit_code=22)

    scripted_runner.on("curl", _curl_404)

    with pytest.raises(DownloadError):
        scenario.run()

    assert scripted_runner.executables() == ["curl", "helm"]
    assert scripted_runner.calls[-1][1][0] == "uninstall"
    assert not scenario.provisioner.staging_dir.exists()
