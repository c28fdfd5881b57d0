"""Image reference parsing and command output checks."""

from __future__ import annotations

import re
import shutil
import subprocess
from collections.abc import Sequence

_NAME_TOTAL_LENGTH_MAX = 255

_ALPHA_NUMERIC = r"[a-z0-9]+"
_SEPARATOR = r"(?:[._]|__|-+)"
_NAME_COMPONENT = rf"{_ALPHA_NUMERIC}(?:{_SEPARATOR}{_ALPHA_NUMERIC})*"
_DOMAIN_COMPONENT = r"(?:[a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])"
_DOMAIN = rf"{_DOMAIN_COMPONENT}(?:\.{_DOMAIN_COMPONENT})*(?::[0-9]+)?"
_TAG = r"[\w][\w.-]{0,127}"
_DIGEST = r"[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}"
_NAME = rf"(?:{_DOMAIN}/)?{_NAME_COMPONENT}(?:/{_NAME_COMPONENT})*"
_REFERENCE = re.compile(rf"({_NAME})(?::({_TAG}))?(?:@({_DIGEST}))?", re.ASCII)

_ENCODED = re.compile(r"[a-f0-9]+")
_DIGEST_HEX_LENGTHS = {"sha256": 64, "sha384": 96, "sha512": 128}


class ImageReferenceError(ValueError):
    """Raised when a string is not a valid container image reference."""


class CommandError(RuntimeError):
    """Raised when a command cannot be run or fails."""


def _check_digest(digest: str) -> None:
    algorithm, _, encoded = digest.partition(":")
    expected = _DIGEST_HEX_LENGTHS.get(algorithm)
    if expected is None:
        raise ImageReferenceError("unsupported digest algorithm")
    if len(encoded) != expected:
        raise ImageReferenceError("invalid checksum digest length")
    if not _ENCODED.fullmatch(encoded):
        raise ImageReferenceError("invalid checksum digest format")


def _reference_problem(s: str) -> str:
    if not s:
        return "repository name must have at least one component"
    if _REFERENCE.fullmatch(s.lower()):
        return "invalid reference format: repository name must be lowercase"
    return "invalid reference format"


def parse_image(s: str) -> tuple[str, str | None, str | None]:
    """Parse the image reference ``s``.

    Returns ``(name, tag, digest)``, with tag and digest None when absent.
    Raises :class:`ImageReferenceError` if ``s`` is not a syntactically valid
    reference or names an unsupported or malformed digest. Short digests are
    not handled.
    """
    match = _REFERENCE.fullmatch(s)
    try:
        if match is None:
            raise ImageReferenceError(_reference_problem(s))
        name, tag, digest = match.groups()
        if len(name) > _NAME_TOTAL_LENGTH_MAX:
            raise ImageReferenceError(
                f"repository name must not be more than {_NAME_TOTAL_LENGTH_MAX} characters"
            )
        if digest is not None:
            _check_digest(digest)
    except ImageReferenceError as err:
        raise ImageReferenceError(f"failed to parse image {s}: {err}") from err
    return name, tag, digest


def run_command(cmd: str, args: Sequence[str]) -> str:
    """Run ``cmd`` with ``args`` and return its standard output.

    Arguments that look like paths (starting with "/" or ".") are refused.
    """
    for arg in args:
        if arg.startswith(("/", ".")):
            raise CommandError(f"invalid argument {arg!r}")
    try:
        completed = subprocess.run([cmd, *args], capture_output=True, check=True)
    except (OSError, subprocess.CalledProcessError) as err:
        raise CommandError(f"failed to run command {cmd!r} with args {list(args)!r}: {err}") from err
    return completed.stdout.decode(errors="replace")


def string_in_pod_exec(ns: str, name: str, expected_string: str, cmd: Sequence[str]) -> bool:
    """Run ``cmd`` in pod ``ns/name`` through kubectl and look for ``expected_string``.

    Returns whether the string was found in the output. Raises
    :class:`CommandError` if kubectl is missing or the command fails.
    """
    kubectl = shutil.which("kubectl")
    if kubectl is None:
        raise CommandError("kubectl not found in PATH")
    args = ["exec", name, f"--namespace={ns}", "--", *cmd]
    return expected_string in run_command(kubectl, args)