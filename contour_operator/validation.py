"""Validation of Contour, GatewayClass and Gateway resources."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Callable

from contour_operator.models import (
    GATEWAY_CLASS_PARAMS_REF_GROUP,
    GATEWAY_CLASS_PARAMS_REF_KIND,
    HTTP_PROTOCOL,
    HTTPS_PROTOCOL,
    IP_ADDRESS_TYPE,
    Contour,
    Gateway,
    GatewayClass,
    NetworkPublishingType,
)
from contour_operator.retryable import new_maybe_retryable_aggregate

_GATEWAY_CLASS_NAMESPACED_PARAM_REF = "Namespace"
_DNS1123_SUBDOMAIN_MAX_LENGTH = 253
_DNS1123_LABEL = r"[a-z0-9]([-a-z0-9]*[a-z0-9])?"
_DNS1123_SUBDOMAIN = re.compile(rf"{_DNS1123_LABEL}(\.{_DNS1123_LABEL})*")


class ValidationError(ValueError):
    """Raised when a resource does not meet the API specification."""


def _is_valid_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def _is_dns1123_subdomain(value: str) -> bool:
    return (
        len(value) <= _DNS1123_SUBDOMAIN_MAX_LENGTH
        and _DNS1123_SUBDOMAIN.fullmatch(value) is not None
    )


def validate_contour(contour: Contour, other_contours_exist: Callable[[Contour], bool]) -> None:
    """Raise :class:`ValidationError` if ``contour`` is invalid.

    ``other_contours_exist`` is asked whether other Contours already use the
    namespace named in the spec of ``contour``.
    """
    spec_ns = contour.spec.namespace.name
    try:
        exist = other_contours_exist(contour)
    except Exception as err:
        raise ValidationError(
            f"failed to verify if other contours exist in namespace {spec_ns}: {err}"
        ) from err
    if exist:
        raise ValidationError(f"other contours exist in namespace {spec_ns}")

    container_ports(contour)

    if contour.spec.network_publishing.envoy.type == NetworkPublishingType.NODE_PORT_SERVICE:
        node_ports(contour)


def container_ports(contour: Contour) -> None:
    """Raise :class:`ValidationError` if the Envoy container ports are invalid."""
    numbers: set[int] = set()
    names: set[str] = set()
    for port in contour.spec.network_publishing.envoy.container_ports:
        if port.port_number in numbers:
            raise ValidationError(f"duplicate container port number {port.port_number}")
        numbers.add(port.port_number)
        if port.name in names:
            raise ValidationError(f"duplicate container port name {port.name!r}")
        names.add(port.name)
    if {"http", "https"} <= names:
        return
    raise ValidationError("http and https container ports are unspecified")


def node_ports(contour: Contour) -> None:
    """Raise :class:`ValidationError` if the Envoy node ports are invalid.

    Unspecified node ports are valid; the API server assigns them.
    """
    ports = contour.spec.network_publishing.envoy.node_ports
    if ports is None:
        return
    for port in ports:
        if port.name not in ("http", "https"):
            raise ValidationError(
                f'invalid port name {port.name!r}; only "http" and "https" are supported'
            )
    if len(ports) != 2:
        raise ValidationError(f"{len(ports)} is an invalid number of nodeports")
    first, second = ports
    if first.name == second.name:
        raise ValidationError("duplicate nodeport names detected")
    if first.port_number is not None and first.port_number == second.port_number:
        raise ValidationError("duplicate nodeport port numbers detected")


def validate_gateway_class(gc: GatewayClass) -> None:
    """Raise :class:`ValidationError` if the parametersRef of ``gc`` is invalid."""
    ref = gc.spec.parameters_ref
    if ref is None:
        raise ValidationError(f"invalid gatewayclass {gc.name}, missing parametersRef")
    if ref.scope != _GATEWAY_CLASS_NAMESPACED_PARAM_REF:
        raise ValidationError(
            f"invalid parametersRef for gatewayclass {gc.name}, "
            "only namespaced-scoped references are supported"
        )
    if ref.group != GATEWAY_CLASS_PARAMS_REF_GROUP:
        raise ValidationError(f"invalid group {ref.group!r}")
    if ref.kind != GATEWAY_CLASS_PARAMS_REF_KIND:
        raise ValidationError(f"invalid kind {ref.kind!r}")
    if ref.namespace is None:
        raise ValidationError(
            f"invalid parametersRef for gatewayclass {gc.name}, missing namespace"
        )


def validate_gateway(gw: Gateway, get_gateway_class: Callable[[str], GatewayClass]) -> None:
    """Raise an aggregate of every problem found with ``gw``.

    ``get_gateway_class`` looks up a GatewayClass by name and raises if it
    cannot be found.
    """
    where = f"{gw.namespace}/{gw.name}"
    errors: list[BaseException] = []
    try:
        get_gateway_class(gw.spec.gateway_class_name)
    except Exception as err:
        errors.append(ValidationError(f"failed to get gatewayclass for gateway {where}: {err}"))
    try:
        gateway_listeners(gw)
    except ValidationError as err:
        errors.append(ValidationError(f"failed to validate listeners for gateway {where}: {err}"))
    try:
        gateway_addresses(gw)
    except ValidationError as err:
        errors.append(ValidationError(f"failed to validate addresses for gateway {where}: {err}"))
    aggregate = new_maybe_retryable_aggregate(errors)
    if aggregate is not None:
        raise aggregate


def gateway_listeners(gw: Gateway) -> None:
    """Raise :class:`ValidationError` if the listeners of ``gw`` are invalid."""
    listeners = gw.spec.listeners
    if len(listeners) != 2:
        raise ValidationError(f"{len(listeners)} is an invalid number of listeners")
    if listeners[0].port == listeners[1].port:
        raise ValidationError(f"invalid listeners, port {listeners[0].port} is non-unique")
    for listener in listeners:
        if listener.protocol not in (HTTP_PROTOCOL, HTTPS_PROTOCOL):
            raise ValidationError(f"invalid listener protocol {listener.protocol}")
        hostname = listener.hostname
        if hostname is None:
            continue
        # A listener hostname cannot be an IP address.
        if _is_valid_ip(hostname) or not _is_dns1123_subdomain(hostname):
            raise ValidationError(f"invalid listener hostname {hostname}")


def gateway_addresses(gw: Gateway) -> None:
    """Raise :class:`ValidationError` if any address of ``gw`` is invalid."""
    for address in gw.spec.addresses:
        if address.type != IP_ADDRESS_TYPE:
            raise ValidationError(f"invalid address type {address.type}")
        if not _is_valid_ip(address.value):
            raise ValidationError(f"invalid address value {address.value}")