"""Computation and merging of status conditions."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timezone

from contour_operator.models import (
    CONTOUR_AVAILABLE_CONDITION_TYPE,
    DEPLOYMENT_AVAILABLE,
    GATEWAY_CLASS_CONDITION_ADMITTED,
    GATEWAY_CONDITION_READY,
    Condition,
    ConditionStatus,
    DaemonSet,
    Deployment,
)


def _available(status: ConditionStatus, reason: str, message: str) -> Condition:
    return Condition(CONTOUR_AVAILABLE_CONDITION_TYPE, status, reason, message)


def compute_contour_available_condition(
    deployment: Deployment | None,
    daemonset: DaemonSet | None,
    gc_set: bool,
    gc_exists: bool,
    gc_admitted: bool,
) -> Condition:
    """Compute the Available condition of a Contour."""
    if gc_set:
        if not gc_exists:
            return _available(
                ConditionStatus.FALSE,
                "GatewayClassNonExistent",
                "The referenced GatewayClass does not exist.",
            )
        if not gc_admitted:
            return _available(
                ConditionStatus.FALSE,
                "GatewayClassNotAdmitted",
                "The referenced GatewayClass is not admitted.",
            )
        return _available(
            ConditionStatus.TRUE,
            "GatewayClassAdmitted",
            "The referenced GatewayClass is admitted.",
        )

    if deployment is None:
        return _available(
            ConditionStatus.FALSE, "ContourUnavailable", "Contour deployment does not exist."
        )
    if daemonset is None:
        return _available(
            ConditionStatus.FALSE, "ContourUnavailable", "Envoy daemonset does not exist."
        )

    ds_available = daemonset.number_available > 0
    for cond in deployment.conditions:
        if cond.type != DEPLOYMENT_AVAILABLE:
            continue
        if cond.status == ConditionStatus.TRUE:
            if ds_available:
                return _available(
                    ConditionStatus.TRUE, "ContourAvailable", "Contour has minimum availability."
                )
            return _available(
                ConditionStatus.FALSE,
                "ContourUnavailable",
                "Envoy daemonset does not have minimum availability.",
            )
        if cond.status == ConditionStatus.FALSE:
            lowered = cond.message.lower()
            if ds_available:
                return _available(
                    ConditionStatus.FALSE, "ContourUnavailable", f"Contour {lowered}"
                )
            return _available(
                ConditionStatus.FALSE,
                "ContourUnavailable",
                f"Envoy daemonset does not have minimum availability. Contour {lowered}",
            )
        if cond.status == ConditionStatus.UNKNOWN:
            return _available(
                ConditionStatus.UNKNOWN,
                f"ContourUnknown: {cond.message}",
                f"Contour status unknown. {cond.message}",
            )

    return _available(ConditionStatus.UNKNOWN, "ContourUnknown", "Contour status unknown.")


def compute_gateway_class_admitted_condition(owned: bool, valid: bool) -> Condition:
    """Compute the Admitted condition of a GatewayClass."""
    if not valid:
        return Condition(
            GATEWAY_CLASS_CONDITION_ADMITTED, ConditionStatus.FALSE, "Invalid", "Invalid GatewayClass."
        )
    if owned:
        return Condition(
            GATEWAY_CLASS_CONDITION_ADMITTED,
            ConditionStatus.TRUE,
            "Owned",
            "Owned by Contour Operator.",
        )
    return Condition(
        GATEWAY_CLASS_CONDITION_ADMITTED,
        ConditionStatus.FALSE,
        "NotOwned",
        "Not owned by Contour Operator.",
    )


def compute_gateway_ready_condition(
    gc_exists: bool, gc_admitted: bool, contour_available: bool
) -> Condition:
    """Compute the Ready condition of a Gateway."""
    if not gc_exists:
        status, reason, message = (
            ConditionStatus.FALSE,
            "NonExistentGatewayClass",
            "The GatewayClass does not exist.",
        )
    elif not gc_admitted:
        status, reason, message = (
            ConditionStatus.FALSE,
            "GatewayClassNotAdmitted",
            "The GatewayClass is not admitted.",
        )
    elif not contour_available:
        status, reason, message = (
            ConditionStatus.FALSE,
            "ContourNotAvailable",
            "The Contour is not available.",
        )
    else:
        status, reason, message = (
            ConditionStatus.TRUE,
            "GatewayReady",
            "The Gateway is ready to serve routes.",
        )
    return Condition(GATEWAY_CONDITION_READY, status, reason, message)


def merge_conditions(
    conditions: Iterable[Condition], *args: Condition, now: datetime | None = None
) -> list[Condition]:
    """Add or update conditions of matching type, returning a new list.

    A changed condition keeps its transition time unless its status changed;
    new conditions and status changes are stamped with ``now`` (the current
    UTC time by default). The inputs are left untouched.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    merged = [replace(cond) for cond in conditions]
    additions: list[Condition] = []
    for update in args:
        add = True
        for j, cond in enumerate(merged):
            if cond.type != update.type:
                continue
            add = False
            if condition_changed(cond, update):
                merged[j] = replace(
                    cond,
                    status=update.status,
                    reason=update.reason,
                    message=update.message,
                    last_transition_time=(
                        now if cond.status != update.status else cond.last_transition_time
                    ),
                )
                break
        if add:
            additions.append(replace(update, last_transition_time=now))
    return merged + additions


def condition_changed(a: Condition, b: Condition) -> bool:
    """Return True if status, reason or message differ; the time is ignored."""
    return (a.status, a.reason, a.message) != (b.status, b.reason, b.message)


def remove_gateway_condition(
    conditions: Iterable[Condition] | None, condition_type: str
) -> list[Condition]:
    """Return the conditions whose type is not ``condition_type``."""
    return [cond for cond in (conditions or ()) if cond.type != condition_type]