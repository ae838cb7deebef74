"""
Waiting utilities for observing eventually consistent network state.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Clock:
    """Wall clock and sleep used by waits. Tests swap in a fake."""

    now: Callable[[], float] = time.time
    sleep: Callable[[float], None] = time.sleep


SYSTEM_CLOCK = Clock()


class WaitTimeoutError(TimeoutError):
    """Raised when a wait runs out of time before its condition holds."""

    def __init__(self, message: str, resource: str | None = None, timeout: float | None = None):
        self.resource = resource
        self.timeout = timeout
        super().__init__(message)


T = TypeVar("T")


def wait_until_with_value(
    fn: Callable[[], T],
    predicate: Callable[[T], bool],
    error_with: str = "Timed out",
    timeout: float = 30,
    step: float = 1.0,
    clock: Clock = SYSTEM_CLOCK,
    resource: str | None = None,
) -> T:
    """
    Poll `fn` every `step` seconds until `predicate` holds on its value, and
    return that value.

    The first poll happens immediately, so a condition that already holds never
    sleeps. Exceptions raised by `fn` propagate: a failed query is not read as
    "not ready yet".

    Raises:
        WaitTimeoutError: If `timeout` seconds pass without the predicate holding
    """
    deadline = clock.now() + timeout
    while True:
        value = fn()
        if predicate(value):
            return value
        if clock.now() >= deadline:
            raise WaitTimeoutError(error_with, resource=resource, timeout=timeout)
        logger.debug(f"Waiting on {resource or 'condition'}, current value: {value!r}")
        clock.sleep(step)


def wait_until(
    fn: Callable[[], Any],
    error_with: str = "Timed out",
    timeout: float = 30,
    step: float = 1.0,
    clock: Clock = SYSTEM_CLOCK,
    resource: str | None = None,
) -> None:
    """
    Wait until a function call returns truth value, given time step, and timeout.
    """
    wait_until_with_value(
        fn,
        bool,
        error_with=error_with,
        timeout=timeout,
        step=step,
        clock=clock,
        resource=resource,
    )


def wait_for_wall_clock(
    target_unix_time: int,
    step: float = 1.0,
    clock: Clock = SYSTEM_CLOCK,
) -> None:
    """Block until the wall clock, in whole seconds, reaches `target_unix_time`."""
    while int(clock.now()) < target_unix_time:
        clock.sleep(step)
