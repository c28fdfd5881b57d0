"""Operator configuration."""

from dataclasses import dataclass

DEFAULT_CONTOUR_IMAGE = "docker.io/projectcontour/contour:main"
DEFAULT_ENVOY_IMAGE = "docker.io/envoyproxy/envoy:v1.18.3"
DEFAULT_METRICS_ADDR = ":8080"
DEFAULT_ENABLE_LEADER_ELECTION = False
DEFAULT_LEADER_ELECTION_ID = "0d879e31.projectcontour.io"


@dataclass
class Config:
    """Configuration of the operator.

    ``contour_image`` and ``envoy_image`` are the container images of the
    managed Contour and Envoy containers. ``metrics_bind_address`` is the TCP
    address for serving metrics ("0" disables it). ``leader_election`` turns
    leader election on, and ``leader_election_id`` names the lock it holds.
    """

    contour_image: str = DEFAULT_CONTOUR_IMAGE
    envoy_image: str = DEFAULT_ENVOY_IMAGE
    metrics_bind_address: str = DEFAULT_METRICS_ADDR
    leader_election: bool = DEFAULT_ENABLE_LEADER_ELECTION
    leader_election_id: str = DEFAULT_LEADER_ELECTION_ID