#!/usr/bin/env python3
"""
Scenario runner for a live Gecko network.

Usage:
    ./entry.py                                # Run all scenarios
    ./entry.py -t fund_and_validate           # Run specific scenario(s)
    ./entry.py -g transfers                   # Run scenario group(s)
    ./entry.py -n network.toml                # Use a network config file
"""

import argparse
import os
import sys

import flexitest

from ava_testsuite.config import NETWORK_CONFIG_ENV_VAR, load_network_config
from ava_testsuite.runtime import TestRuntimeWithLogging
from ava_testsuite.test_logging import setup_logging
from envconfigs import GeckoNetworkEnv

SCENARIO_DIR = "scenarios"
DD_ROOT = "_dd"


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="entry.py",
        description="Run workflow scenarios against a running Gecko network",
    )
    parser.add_argument(
        "-t",
        "--tests",
        nargs="*",
        help="Run specific scenario(s)",
    )
    parser.add_argument(
        "-g",
        "--groups",
        nargs="*",
        help="Run scenario group(s)",
    )
    parser.add_argument(
        "-n",
        "--network-config",
        help="TOML file naming the nodes to test (defaults to $GECKO_NETWORK_CONFIG)",
    )
    return parser.parse_args(argv[1:])


def filter_tests(parsed_args: argparse.Namespace, modules: dict[str, str]) -> dict[str, str]:
    """
    Filters scenario modules against parsed args supplied from the command line.
    """
    arg_groups = frozenset(parsed_args.groups or [])
    # Extract filenames from the tests paths.
    arg_tests = frozenset(
        [os.path.split(t)[1].removesuffix(".py") for t in parsed_args.tests or []]
    )

    filtered = dict()
    for test, path in modules.items():
        test_path_parts = os.path.normpath(path).split(os.path.sep)
        idx = next((i for i, part in enumerate(test_path_parts) if part == SCENARIO_DIR), None)
        test_path_parts = test_path_parts[idx + 1 :] if idx is not None else test_path_parts[-1:]
        # The "groups" the current scenario belongs to.
        test_groups = frozenset(test_path_parts[:-1])

        take = True
        if arg_groups and not (arg_groups & test_groups):
            take = False
        if arg_tests and test not in arg_tests:
            take = False

        if take:
            filtered[test] = path

    return filtered


def main(argv: list[str]) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging()

    if args.network_config:
        # Scenarios load the config themselves, so hand the path down.
        os.environ[NETWORK_CONFIG_ENV_VAR] = os.path.abspath(args.network_config)
    network = load_network_config()

    global_envs: dict[str, flexitest.EnvConfig] = {
        "gecko": GeckoNetworkEnv(network),
    }

    root_dir = os.path.dirname(os.path.abspath(__file__))
    datadir = flexitest.create_datadir_in_workspace(os.path.join(root_dir, DD_ROOT))
    runtime = TestRuntimeWithLogging(global_envs, datadir, {})

    scenario_dir = os.path.join(root_dir, SCENARIO_DIR)
    modules = filter_tests(args, flexitest.runtime.scan_dir_for_modules(scenario_dir))
    tests = flexitest.runtime.load_candidate_modules(modules)

    runtime.prepare_registered_tests()
    results = runtime.run_tests(tests)

    runtime.save_json_file("results.json", results)
    flexitest.dump_results(results)

    # Exit with error if any scenario failed
    flexitest.fail_on_error(results)

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
