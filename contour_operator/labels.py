"""Label matching for Kubernetes-style objects."""

from collections.abc import Mapping


def labels_exist(current: Mapping[str, str] | None, required: Mapping[str, str]) -> bool:
    """Return True if every key/value pair of ``required`` is present in ``current``.

    An object without labels (``current`` is None) never matches.
    """
    if current is None:
        return False
    return all(key in current and current[key] == value for key, value in required.items())