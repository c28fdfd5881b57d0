# contour-operator

Building blocks for an operator that deploys and manages Contour and Envoy:
resource models, validation of Contour, GatewayClass and Gateway objects,
status condition computation, retryable error aggregation and container
image reference checks.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `contour_operator.models`: dataclasses `Contour`, `ContourSpec`,
  `NamespaceSpec`, `NetworkPublishing`, `EnvoyNetworkPublishing`,
  `ContainerPort`, `NodePort`, `GatewayClass`, `GatewayClassSpec`,
  `ParametersReference`, `Gateway`, `GatewaySpec`, `Listener`,
  `GatewayAddress`, `Deployment`, `DeploymentCondition`, `DaemonSet` and
  `Condition`, and the enums `ConditionStatus` and `NetworkPublishingType`.
  `Contour.gateway_class_set()` tells whether a Contour references a
  GatewayClass.
- `contour_operator.validation`:
  - `validate_contour(contour, other_contours_exist)` takes a callable that
    says whether other Contours use the same namespace, then checks container
    ports, and node ports when Envoy is published as a `NodePortService`.
  - `container_ports`, `node_ports`, `validate_gateway_class`,
    `gateway_listeners` and `gateway_addresses` raise `ValidationError` on
    the first problem found.
  - `validate_gateway(gw, get_gateway_class)` collects every problem (a
    failed GatewayClass lookup, bad listeners, bad addresses) and raises them
    together as an `AggregateError`.
- `contour_operator.conditions`: `compute_contour_available_condition`,
  `compute_gateway_class_admitted_condition`,
  `compute_gateway_ready_condition`, `merge_conditions` (returns a new list;
  the transition time is set to `now` for new conditions and status changes),
  `condition_changed` (ignores the transition time) and
  `remove_gateway_condition`.
- `contour_operator.retryable`: `RetryableError` (an error with an `after`
  delay), `AggregateError`, `new_aggregate` and
  `new_maybe_retryable_aggregate`. Both functions drop `None` entries and
  return `None` when nothing is left. If every remaining error is a
  `RetryableError`, `new_maybe_retryable_aggregate` returns a
  `RetryableError` whose `after` is the shortest delay; otherwise an
  `AggregateError`.
- `contour_operator.parse`: `parse_image(s)` returns `(name, tag, digest)`
  or raises `ImageReferenceError`; sha256, sha384 and sha512 digests must
  have their full length. `run_command(cmd, args)` runs a program and returns
  its output, refusing arguments that start with `/` or `.`.
  `string_in_pod_exec(ns, name, expected_string, cmd)` runs `cmd` in a pod
  with `kubectl exec` and returns whether `expected_string` appears in the
  output. Failures raise `CommandError`.
- `contour_operator.config`: `Config`, the operator's settings with their
  defaults (Contour and Envoy images, metrics address, leader election).
- `contour_operator.resources`: `GroupVersionResource`,
  `gateway_api_resources()` and `gateway_crds_exist(kind_for)`, which is
  False as soon as `kind_for` raises `LookupError` for one of them.
- `contour_operator.labels.labels_exist` and `contour_operator.slices`
  (`remove_string`, `contains_string`, `contains_int32`): small helpers.

## Example

```python
from contour_operator.models import GatewayClass, GatewayClassSpec, ParametersReference
from contour_operator.validation import ValidationError, validate_gateway_class

gc = GatewayClass(
    name="example",
    spec=GatewayClassSpec(
        parameters_ref=ParametersReference(
            group="operator.projectcontour.io",
            kind="Contour",
            name="a-contour",
            scope="Namespace",
            namespace="a-namespace",
        ),
    ),
)

try:
    validate_gateway_class(gc)
except ValidationError as exc:
    print(f"invalid: {exc}")
```

## What this package does not do

It does not talk to a Kubernetes API server and has no command to run.
There is no controller or reconciliation loop: nothing here creates,
updates or deletes namespaces, deployments, daemonsets, services or other
cluster objects, and nothing writes status back to a cluster. Lookups such
as "do other Contours exist" or "find this GatewayClass" are passed in by
the caller as plain functions.