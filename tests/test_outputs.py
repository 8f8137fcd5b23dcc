import pytest

from epinio_e2e.errors import UnexpectedOutputError
from epinio_e2e.outputs import contains, parse_load_balancer_ip, require_match, require_phrase

TRAEFIK_DESCRIPTION = """\
Name:                     traefik
Namespace:                kube-system
Type:                     LoadBalancer
IP:                       10.43.112.9
LoadBalancer Ingress:     192.168.5.15
Port:                     web  80/TCP
"""

HELM_INSTALL_OUTPUT = """\
NAME: epinio-installer
LAST DEPLOYED: Thu Feb  3 10:00:00 2022
NAMESPACE: default
STATUS: deployed
REVISION: 1
"""


def test_success_is_a_substring_match():
    assert contains(HELM_INSTALL_OUTPUT, "STATUS: deployed")
    assert not contains(HELM_INSTALL_OUTPUT, "STATUS: failed")


def test_require_phrase_returns_output():
    assert require_phrase(HELM_INSTALL_OUTPUT, "STATUS: deployed", "helm install") == HELM_INSTALL_OUTPUT


def test_require_phrase_reports_the_full_output():
    with pytest.raises(UnexpectedOutputError) as exc_info:
        require_phrase("STATUS: failed", "STATUS: deployed", "helm install")

    err = exc_info.value
    assert err.step == "helm install"
    assert err.expected == "STATUS: deployed"
    assert err.output == "STATUS: failed"


def test_require_match():
    output = "Kubernetes control plane is running at https://127.0.0.1:6443\n"
    assert require_match(output, r"is running at .", "cluster-info")
    with pytest.raises(UnexpectedOutputError):
        require_match("The connection to the server was refused", r"is running at .", "cluster-info")


def test_parse_load_balancer_ip():
    assert parse_load_balancer_ip(TRAEFIK_DESCRIPTION) == "192.168.5.15"


def test_parse_load_balancer_ip_missing():
    pending = TRAEFIK_DESCRIPTION.replace("LoadBalancer Ingress:     192.168.5.15\n", "")
    assert parse_load_balancer_ip(pending) is None
    assert parse_load_balancer_ip("LoadBalancer Ingress:     pending") is None
