"""Gateway API resources the operator depends on."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

GATEWAY_API_GROUP = "networking.x-k8s.io"
GATEWAY_API_VERSION = "v1alpha1"


@dataclass(frozen=True)
class GroupVersionResource:
    """A resource identified by API group, version and plural name."""

    group: str
    version: str
    resource: str


def gateway_api_resources() -> list[GroupVersionResource]:
    """Return the Gateway API resources used by the operator.

    TCP and UDP routes are left out since the operator does not support them.
    """
    return [
        GroupVersionResource(GATEWAY_API_GROUP, GATEWAY_API_VERSION, resource)
        for resource in ("gatewayclasses", "gateways", "httproutes", "backendpolicies", "tlsroutes")
    ]


def gateway_crds_exist(kind_for: Callable[[GroupVersionResource], Any]) -> bool:
    """Return True if every Gateway API resource is known.

    ``kind_for`` resolves a resource to its kind and raises ``LookupError``
    when no kind matches. Other lookup failures do not count as missing.
    """
    for gvr in gateway_api_resources():
        try:
            kind_for(gvr)
        except LookupError:
            return False
        except Exception:
            continue
    return True