"""Data models for the resources the operator validates and reports on."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

GATEWAY_CLASS_PARAMS_REF_GROUP = "operator.projectcontour.io"
GATEWAY_CLASS_PARAMS_REF_KIND = "Contour"
CONTOUR_AVAILABLE_CONDITION_TYPE = "Available"
DEPLOYMENT_AVAILABLE = "Available"
GATEWAY_CLASS_CONDITION_ADMITTED = "Admitted"
GATEWAY_CONDITION_READY = "Ready"
GATEWAY_CONDITION_SCHEDULED = "Scheduled"
HTTP_PROTOCOL = "HTTP"
HTTPS_PROTOCOL = "HTTPS"
IP_ADDRESS_TYPE = "IPAddress"


class ConditionStatus(str, Enum):
    """Status of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


@dataclass
class Condition:
    """A status condition of a resource."""

    type: str
    status: str
    reason: str = ""
    message: str = ""
    last_transition_time: datetime | None = None


class NetworkPublishingType(str, Enum):
    """How Envoy is exposed outside the cluster."""

    LOAD_BALANCER_SERVICE = "LoadBalancerService"
    NODE_PORT_SERVICE = "NodePortService"
    CLUSTER_IP_SERVICE = "ClusterIPService"


@dataclass
class ContainerPort:
    """A named Envoy container port."""

    name: str
    port_number: int


@dataclass
class NodePort:
    """A named node port; a None number is assigned by the API server."""

    name: str
    port_number: int | None = None


def _default_container_ports() -> list[ContainerPort]:
    return [ContainerPort("http", 8080), ContainerPort("https", 8443)]


@dataclass
class EnvoyNetworkPublishing:
    """Network publishing settings for Envoy."""

    type: NetworkPublishingType = NetworkPublishingType.LOAD_BALANCER_SERVICE
    container_ports: list[ContainerPort] = field(default_factory=_default_container_ports)
    node_ports: list[NodePort] | None = None


@dataclass
class NetworkPublishing:
    """Network publishing settings of a Contour."""

    envoy: EnvoyNetworkPublishing = field(default_factory=EnvoyNetworkPublishing)


@dataclass
class NamespaceSpec:
    """Namespace into which a Contour's resources are deployed."""

    name: str = "projectcontour"
    remove_on_deletion: bool = False


@dataclass
class ContourSpec:
    """Desired state of a Contour."""

    replicas: int = 2
    namespace: NamespaceSpec = field(default_factory=NamespaceSpec)
    network_publishing: NetworkPublishing = field(default_factory=NetworkPublishing)
    gateway_class_ref: str | None = None
    ingress_class_name: str | None = None


@dataclass
class Contour:
    """A Contour custom resource."""

    name: str = ""
    namespace: str = ""
    spec: ContourSpec = field(default_factory=ContourSpec)
    labels: dict[str, str] | None = None
    finalizers: list[str] = field(default_factory=list)
    conditions: list[Condition] = field(default_factory=list)

    def gateway_class_set(self) -> bool:
        """Return True if the Contour references a GatewayClass."""
        return self.spec.gateway_class_ref is not None


@dataclass
class ParametersReference:
    """Reference from a GatewayClass to its parameters resource."""

    group: str
    kind: str
    name: str
    scope: str | None = None
    namespace: str | None = None


@dataclass
class GatewayClassSpec:
    """Desired state of a GatewayClass."""

    controller: str = ""
    parameters_ref: ParametersReference | None = None


@dataclass
class GatewayClass:
    """A GatewayClass resource."""

    name: str = ""
    spec: GatewayClassSpec = field(default_factory=GatewayClassSpec)
    namespace: str = ""
    conditions: list[Condition] = field(default_factory=list)


@dataclass
class Listener:
    """A Gateway listener."""

    port: int
    protocol: str
    hostname: str | None = None


@dataclass
class GatewayAddress:
    """An address requested for a Gateway."""

    value: str
    type: str | None = None


@dataclass
class GatewaySpec:
    """Desired state of a Gateway."""

    gateway_class_name: str = ""
    listeners: list[Listener] = field(default_factory=list)
    addresses: list[GatewayAddress] = field(default_factory=list)


@dataclass
class Gateway:
    """A Gateway resource."""

    name: str = ""
    namespace: str = ""
    spec: GatewaySpec = field(default_factory=GatewaySpec)
    conditions: list[Condition] = field(default_factory=list)


@dataclass
class DeploymentCondition:
    """A condition reported by a Deployment."""

    type: str
    status: str
    message: str = ""


@dataclass
class Deployment:
    """The status of a Deployment that matters to the operator."""

    name: str = ""
    conditions: list[DeploymentCondition] = field(default_factory=list)
    available_replicas: int = 0


@dataclass
class DaemonSet:
    """The status of a DaemonSet that matters to the operator."""

    name: str = ""
    number_available: int = 0