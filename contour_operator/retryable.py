"""Errors that carry a retry delay, and aggregation of several errors."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta


class RetryableError(Exception):
    """An error for an operation that should be retried after ``after``."""

    def __init__(self, error: BaseException | str, after: timedelta) -> None:
        super().__init__(str(error))
        self.error = error
        self.after = after

    def __str__(self) -> str:
        return str(self.error)


class AggregateError(Exception):
    """Several errors reported as one."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors: tuple[BaseException, ...] = tuple(errors)
        super().__init__(str(self))

    def _messages(self) -> list[str]:
        seen: set[str] = set()
        messages: list[str] = []

        def visit(errs: Iterable[BaseException]) -> None:
            for err in errs:
                if isinstance(err, AggregateError):
                    visit(err.errors)
                    continue
                msg = str(err)
                if msg not in seen:
                    seen.add(msg)
                    messages.append(msg)

        visit(self.errors)
        return messages

    def __str__(self) -> str:
        messages = self._messages()
        if len(messages) == 1:
            return messages[0]
        if not messages:
            return ""
        return "[" + ", ".join(messages) + "]"


def new_aggregate(errors: Iterable[BaseException | None] | None) -> AggregateError | None:
    """Combine ``errors`` into one, dropping None entries.

    Returns None when nothing is left after filtering.
    """
    present = [err for err in (errors or ()) if err is not None]
    if not present:
        return None
    return AggregateError(present)


def new_maybe_retryable_aggregate(
    errors: Iterable[BaseException | None] | None,
) -> AggregateError | RetryableError | None:
    """Combine ``errors`` into one, retryable if every error is retryable.

    None entries are dropped; if nothing remains, None is returned. If any
    error is not retryable, the result is an :class:`AggregateError`.
    Otherwise the aggregate is wrapped in a :class:`RetryableError` whose
    delay is the smallest delay among the errors.
    """
    aggregate = new_aggregate(errors)
    if aggregate is None:
        return None
    if not all(isinstance(err, RetryableError) for err in aggregate.errors):
        return aggregate
    after = min(err.after for err in aggregate.errors)  # type: ignore[union-attr]
    return RetryableError(aggregate, after)