"""Execution policy and executor selection utilities."""

import os
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import TypeAlias

ExecutorClass: TypeAlias = type[ThreadPoolExecutor] | type[ProcessPoolExecutor] | None

# Environment variable to override executor selection.
WC_EXECUTOR_ENV = "WC_EXECUTOR"

# Policy name -> pool class; None runs every partition inline.
EXECUTOR_POLICIES: dict[str, ExecutorClass] = {
    "threads": ThreadPoolExecutor,
    "processes": ProcessPoolExecutor,
    "serial": None,
}

DEFAULT_POLICY = "threads"


def get_policy_name() -> str:
    """Return the policy named by WC_EXECUTOR, falling back to threads."""
    name = os.environ.get(WC_EXECUTOR_ENV, "").lower()
    return name if name in EXECUTOR_POLICIES else DEFAULT_POLICY


def get_executor_class() -> ExecutorClass:
    """
    Select the executor class used to dispatch partitions.

    Each pool slot spends its time blocked on a remote call, so threads are
    the default. "serial" runs in the main thread - useful for debugging with
    breakpoints. "processes" needs picklable storage and executor objects.
    """
    return EXECUTOR_POLICIES[get_policy_name()]
