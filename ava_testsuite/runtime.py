"""
Flexitest runtime that tags log records with the scenario being run.
"""

import logging
import time

import flexitest

from ava_testsuite.test_logging import set_current_test

logger = logging.getLogger(__name__)


class TestRuntimeWithLogging(flexitest.TestRuntime):
    """
    Sets the scenario name read by `TestNameFilter` for the duration of each
    scenario, and logs how long it took.
    """

    def _exec_test(self, test_name: str, env):
        set_current_test(test_name)
        started = time.monotonic()
        logger.info("Starting scenario")
        try:
            return super()._exec_test(test_name, env)
        finally:
            logger.info(f"Scenario finished after {time.monotonic() - started:.1f}s")
            set_current_test(None)
