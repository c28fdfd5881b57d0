from datetime import timedelta

import pytest

from contour_operator.models import (
    ContainerPort,
    Contour,
    ContourSpec,
    EnvoyNetworkPublishing,
    Gateway,
    GatewayAddress,
    GatewayClass,
    GatewayClassSpec,
    GatewaySpec,
    Listener,
    NamespaceSpec,
    NetworkPublishing,
    NetworkPublishingType,
    NodePort,
    ParametersReference,
)
from contour_operator.retryable import AggregateError, RetryableError
from contour_operator.validation import (
    ValidationError,
    container_ports,
    gateway_addresses,
    gateway_listeners,
    node_ports,
    validate_contour,
    validate_gateway,
    validate_gateway_class,
)

INSECURE = 8080
SECURE = 8443
HTTP_NODE = 30080
HTTPS_NODE = 30443


def make_contour(ptype=NetworkPublishingType.LOAD_BALANCER_SERVICE, cports=None, nports=None):
    envoy = EnvoyNetworkPublishing(type=ptype)
    if cports is not None:
        envoy.container_ports = cports
    else:
        envoy.container_ports = [ContainerPort("http", 8080), ContainerPort("https", 8443)]
    envoy.node_ports = nports
    return Contour(
        name="test-validation",
        namespace="test-validation-ns",
        spec=ContourSpec(
            namespace=NamespaceSpec(name="projectcontour"),
            network_publishing=NetworkPublishing(envoy=envoy),
        ),
    )


CONTAINER_CASES = [
    ("default http and https port", None, True),
    ("non-default http and https ports", [ContainerPort("http", 8081), ContainerPort("https", 8444)], True),
    ("duplicate port names", [ContainerPort("http", INSECURE), ContainerPort("http", SECURE)], False),
    ("duplicate port numbers", [ContainerPort("http", INSECURE), ContainerPort("https", INSECURE)], False),
    ("only http port specified", [ContainerPort("http", INSECURE)], False),
    ("only https port specified", [ContainerPort("https", SECURE)], False),
    ("empty ports", [], False),
]


@pytest.mark.parametrize("description,ports,expected", CONTAINER_CASES)
def test_container_ports(description, ports, expected):
    contour = make_contour(cports=ports)
    if expected:
        assert container_ports(contour) is None
    else:
        with pytest.raises(ValidationError):
            container_ports(contour)


def test_container_ports_duplicate_number_message():
    contour = make_contour(cports=[ContainerPort("http", INSECURE), ContainerPort("https", INSECURE)])
    with pytest.raises(ValidationError, match="duplicate container port number 8080"):
        container_ports(contour)


DEFAULT_NODE_PORTS = [NodePort("http", HTTP_NODE), NodePort("https", HTTPS_NODE)]

NODE_CASES = [
    ("default http and https nodeports", None, True),
    ("user-specified http and https nodeports", [NodePort("http", HTTP_NODE), NodePort("https", HTTPS_NODE)], True),
    ("invalid port name", [NodePort("http", HTTP_NODE), NodePort("foo", HTTPS_NODE)], False),
    ("auto-assigned https port number", [NodePort("http", HTTP_NODE), NodePort("https")], True),
    ("auto-assigned http and https port numbers", [NodePort("http"), NodePort("https")], True),
    ("duplicate nodeport names", [NodePort("http", HTTP_NODE), NodePort("http", HTTPS_NODE)], False),
    ("duplicate nodeport numbers", [NodePort("http", HTTP_NODE), NodePort("https", HTTP_NODE)], False),
]


@pytest.mark.parametrize("description,ports,expected", NODE_CASES)
def test_node_ports(description, ports, expected):
    contour = make_contour(
        ptype=NetworkPublishingType.NODE_PORT_SERVICE,
        nports=ports if ports is not None else list(DEFAULT_NODE_PORTS),
    )
    if expected:
        assert node_ports(contour) is None
    else:
        with pytest.raises(ValidationError):
            node_ports(contour)


def test_node_ports_unspecified_are_valid():
    contour = make_contour(ptype=NetworkPublishingType.NODE_PORT_SERVICE, nports=None)
    assert node_ports(contour) is None


def test_validate_contour_other_contours_exist():
    contour = make_contour()
    with pytest.raises(ValidationError, match="other contours exist in namespace projectcontour"):
        validate_contour(contour, lambda c: True)


def test_validate_contour_lookup_failure_is_wrapped():
    def broken(contour):
        raise RuntimeError("boom")

    with pytest.raises(ValidationError, match="failed to verify if other contours exist.*boom"):
        validate_contour(make_contour(), broken)


def test_validate_contour_checks_node_ports_for_node_port_type():
    contour = make_contour(
        ptype=NetworkPublishingType.NODE_PORT_SERVICE,
        nports=[NodePort("http", HTTP_NODE), NodePort("http", HTTPS_NODE)],
    )
    with pytest.raises(ValidationError, match="duplicate nodeport names"):
        validate_contour(contour, lambda c: False)


def test_validate_contour_ignores_node_ports_for_load_balancer():
    contour = make_contour(nports=[NodePort("http", HTTP_NODE), NodePort("http", HTTPS_NODE)])
    assert validate_contour(contour, lambda c: False) is None


def test_validate_contour_bad_container_ports():
    contour = make_contour(cports=[ContainerPort("http", INSECURE)])
    with pytest.raises(ValidationError, match="http and https container ports are unspecified"):
        validate_contour(contour, lambda c: False)


def gateway_class(scope="Namespace", group="operator.projectcontour.io", kind="Contour", namespace="a-namespace"):
    return GatewayClass(
        spec=GatewayClassSpec(
            parameters_ref=ParametersReference(
                scope=scope, group=group, kind=kind, name="a-contour", namespace=namespace
            )
        )
    )


GC_CASES = {
    "happy path": (gateway_class(), True),
    "missing scope": (gateway_class(scope=None), False),
    "invalid scope": (gateway_class(scope="Cluster"), False),
    "invalid group": (gateway_class(group="operator.not-projectcontour.io"), False),
    "invalid kind": (gateway_class(kind="NotContour"), False),
    "missing namespace": (gateway_class(namespace=None), False),
    "missing parameters ref": (GatewayClass(spec=GatewayClassSpec(parameters_ref=None)), False),
}


@pytest.mark.parametrize("name", list(GC_CASES))
def test_validate_gateway_class(name):
    gc, expected = GC_CASES[name]
    if expected:
        assert validate_gateway_class(gc) is None
    else:
        with pytest.raises(ValidationError):
            validate_gateway_class(gc)


def test_validate_gateway_class_invalid_kind_message():
    with pytest.raises(ValidationError, match="invalid kind 'NotContour'"):
        validate_gateway_class(gateway_class(kind="NotContour"))


def make_gateway(listeners=None, addresses=None):
    if listeners is None:
        listeners = [Listener(80, "HTTP"), Listener(443, "HTTPS")]
    return Gateway(
        name="gw",
        namespace="gw-ns",
        spec=GatewaySpec(gateway_class_name="gc", listeners=listeners, addresses=addresses or []),
    )


def test_gateway_listeners_valid():
    gw = make_gateway([Listener(80, "HTTP", "example.com"), Listener(443, "HTTPS")])
    assert gateway_listeners(gw) is None


@pytest.mark.parametrize(
    "listeners,message",
    [
        ([Listener(80, "HTTP")], "1 is an invalid number of listeners"),
        ([Listener(80, "HTTP"), Listener(80, "HTTPS")], "port 80 is non-unique"),
        ([Listener(80, "HTTP"), Listener(443, "TCP")], "invalid listener protocol TCP"),
        ([Listener(80, "HTTP", "10.0.0.1"), Listener(443, "HTTPS")], "invalid listener hostname 10.0.0.1"),
        ([Listener(80, "HTTP", "Bad_Host"), Listener(443, "HTTPS")], "invalid listener hostname Bad_Host"),
    ],
)
def test_gateway_listeners_invalid(listeners, message):
    with pytest.raises(ValidationError, match=message):
        gateway_listeners(make_gateway(listeners))


def test_gateway_addresses():
    assert gateway_addresses(make_gateway(addresses=[GatewayAddress("10.0.0.1", "IPAddress")])) is None
    with pytest.raises(ValidationError, match="invalid address type"):
        gateway_addresses(make_gateway(addresses=[GatewayAddress("10.0.0.1")]))
    with pytest.raises(ValidationError, match="invalid address value foo"):
        gateway_addresses(make_gateway(addresses=[GatewayAddress("foo", "IPAddress")]))


def test_validate_gateway_valid():
    assert validate_gateway(make_gateway(), lambda name: GatewayClass(name=name)) is None


def test_validate_gateway_collects_every_error():
    def missing(name):
        raise RetryableError(LookupError(f"gatewayclass {name} not found"), timedelta(seconds=5))

    gw = make_gateway([Listener(80, "HTTP")], [GatewayAddress("foo", "IPAddress")])
    with pytest.raises(AggregateError) as info:
        validate_gateway(gw, missing)
    assert len(info.value.errors) == 3
    assert "failed to get gatewayclass for gateway gw-ns/gw" in str(info.value)
    assert "failed to validate listeners for gateway gw-ns/gw" in str(info.value)
    assert "failed to validate addresses for gateway gw-ns/gw" in str(info.value)