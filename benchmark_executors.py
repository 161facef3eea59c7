#!/usr/bin/env python3
"""
Benchmark script comparing executor policies for distributed word count.

Runs the distributed-word-count CLI under each WC_EXECUTOR mode with multiple
trials, measures wall-clock time and peak RSS (process tree), and reports a
statistical summary.

Uses psutil to track memory across the entire process tree (parent + all
children), which matters when the process executor is selected.
"""

import argparse
import logging
import os
import subprocess
import sys
import time
from pathlib import Path
from statistics import median

# Check for psutil early
try:
    import psutil
except ImportError:
    sys.stderr.write("ERROR: psutil is required for process-tree memory benchmarking.\n")
    sys.stderr.write("Install with: pip install 'distributed-word-count[bench]'\n")
    sys.exit(1)

logger = logging.getLogger(__name__)

EXECUTOR_MODES = ["threads", "processes", "serial"]


def sample_tree_rss(root_proc: psutil.Process) -> int:
    """Sum RSS of a process and all of its descendants, skipping ones that vanished."""
    total_rss = 0

    try:
        total_rss += root_proc.memory_info().rss
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        pass

    try:
        for child in root_proc.children(recursive=True):
            try:
                total_rss += child.memory_info().rss
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        pass

    return total_rss


def measure_peak_rss_tree(
    root_pid: int,
    poll_interval_s: float,
    proc: subprocess.Popen,
) -> int:
    """
    Measure peak RSS across the entire process tree while process runs.

    Returns:
        Peak total RSS in bytes across the process tree.
    """
    try:
        root_proc = psutil.Process(root_pid)
    except psutil.NoSuchProcess:
        return 0

    peak_bytes = 0
    while proc.poll() is None:
        peak_bytes = max(peak_bytes, sample_tree_rss(root_proc))
        time.sleep(poll_interval_s)

    return peak_bytes


def run_benchmark(
    input_file: str,
    mode: str,
    nodes: int,
    startup_delay: float,
    mem_sample_ms: int,
) -> dict:
    """
    Run the CLI once under one executor mode and capture timing and memory.

    Returns:
        Dict with keys: mode, seconds, peak_rss_tree_mib, output.
    """
    env = os.environ.copy()
    env["WC_EXECUTOR"] = mode

    cmd = [
        sys.executable,
        "-m",
        "distributed_word_count.cli",
        input_file,
        "--nodes",
        str(nodes),
        "--startup-delay",
        str(startup_delay),
        "--log-level",
        "WARNING",
    ]

    start_time = time.perf_counter()
    proc = subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env,
    )

    peak_rss_bytes = measure_peak_rss_tree(proc.pid, mem_sample_ms / 1000.0, proc)

    stdout, stderr = proc.communicate()
    elapsed = time.perf_counter() - start_time

    if proc.returncode != 0:
        logger.error("Error running benchmark (%s):", mode)
        logger.error("%s", stderr)
        sys.exit(1)

    return {
        "mode": mode,
        "seconds": elapsed,
        "peak_rss_tree_mib": peak_rss_bytes / (1024 * 1024),
        "output": stdout.strip(),
    }


def compute_stats(results: list[dict]) -> dict:
    """Compute statistics from a list of benchmark results."""
    times = [r["seconds"] for r in results]
    rss_tree = [r["peak_rss_tree_mib"] for r in results]

    return {
        "median_time": median(times),
        "min_time": min(times),
        "max_time": max(times),
        "median_rss_tree": median(rss_tree),
        "output": results[0]["output"] if results else "",
    }


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Benchmark distributed word count across executor policies.",
    )
    parser.add_argument("input_file", help="Path to input data file")
    parser.add_argument(
        "--modes",
        nargs="+",
        choices=EXECUTOR_MODES,
        default=["threads", "serial"],
        help="Executor modes to compare (default: threads serial)",
    )
    parser.add_argument(
        "--nodes",
        type=int,
        default=100,
        help="Number of nodes / partitions (default: 100)",
    )
    parser.add_argument(
        "--startup-delay",
        type=float,
        default=0.1,
        help="Simulated node startup time in seconds (default: 0.1)",
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=5,
        help="Number of timed trials per mode (default: 5)",
    )
    parser.add_argument(
        "--warmup",
        type=int,
        default=1,
        help="Number of warm-up runs per mode, not counted (default: 1)",
    )
    parser.add_argument(
        "--mem-sample-ms",
        type=int,
        default=50,
        help="Memory sampling interval in milliseconds (default: 50)",
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)

    if not Path(args.input_file).exists():
        parser.error(f"input file not found: {args.input_file}")
    if args.trials < 1:
        parser.error("--trials must be at least 1")

    def bench(mode: str) -> dict:
        return run_benchmark(
            args.input_file, mode, args.nodes, args.startup_delay, args.mem_sample_ms
        )

    logger.info("Warming up (%d run(s) per mode, not counted)...", args.warmup)
    for _ in range(args.warmup):
        for mode in args.modes:
            bench(mode)

    # Rotate mode order per trial to reduce ordering bias.
    results: dict[str, list[dict]] = {mode: [] for mode in args.modes}
    logger.info("Running %d trials...", args.trials)
    for trial in range(args.trials):
        shift = trial % len(args.modes)
        for mode in args.modes[shift:] + args.modes[:shift]:
            results[mode].append(bench(mode))
        logger.info(
            "  Trial %d/%d: %s",
            trial + 1,
            args.trials,
            ", ".join(
                f"{mode}={results[mode][-1]['seconds']:.2f}s/{results[mode][-1]['peak_rss_tree_mib']:.0f}MiB"
                for mode in args.modes
            ),
        )

    stats = {mode: compute_stats(results[mode]) for mode in args.modes}

    outputs = {s["output"] for s in stats.values()}
    if len(outputs) > 1:
        logger.warning("Outputs differ between modes: %s", sorted(outputs))

    logger.info("")
    logger.info("=" * 72)
    logger.info("RESULTS (nodes=%d, startup delay=%.3fs)", args.nodes, args.startup_delay)
    logger.info("=" * 72)
    logger.info(
        f"{'Mode':<12} {'Median(s)':<11} {'Min(s)':<9} {'Max(s)':<9} {'Peak RSS Tree':<14} {'Output':<10}"
    )
    logger.info("-" * 72)
    for mode in args.modes:
        s = stats[mode]
        logger.info(
            f"{mode:<12} {s['median_time']:<11.3f} {s['min_time']:<9.3f} {s['max_time']:<9.3f} "
            f"{s['median_rss_tree']:<14.1f} {s['output']:<10}"
        )
    logger.info("=" * 72)


if __name__ == "__main__":
    main()
