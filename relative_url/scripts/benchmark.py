#!/usr/bin/env python3
"""
Benchmark relative URL detection

Measures classification speed for cold lookups (cache cleared on every call),
repeated lookups served from the verdict cache, a mixed workload, the
protocol-relative option, and the fast paths.

Usage:
    python -m relative_url.scripts.benchmark

With fewer iterations and a smaller cache:
    python -m relative_url.scripts.benchmark --iterations 10000 --cache-size 50
"""

import sys
import argparse
import logging
import time
from typing import Callable, List, Optional

from pydantic import BaseModel

from ..caching import LRUCache
from ..config import settings
from ..services.classifier import UrlClassifier, default_classifier

logger = logging.getLogger(__name__)

WARMUP_ITERATIONS = 1000

TEST_URLS = [
    "http://example.com",
    "https://example.com",
    "https://example.com/path/to/resource",
    "file://path/to/file",
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAABAAAAAQCAIAAACQkWg2AAAAHklEQVQoz2NgAIP/YMBAPBjVMNAa/pMISNcwEoMVAH0ls03D44ABAAAAAElFTkSuQmCC",
    "ftp://ftp.example.com",
    "ws://websocket.example.com",
    "wss://secure-websocket.example.com",
    "//example.com",
    "/path/to/resource",
    "path/to/resource",
    "./relative/path",
    "../parent/path",
    "resource",
    "",
    "mailto:test@example.com",
    "tel:+1234567890",
    "data:text/plain;charset=utf-8,Hello%20World",
]


class BenchmarkResult(BaseModel):
    """Timing for one benchmark scenario"""
    name: str
    iterations: int
    total_ns: int
    avg_ns: float
    ops_per_sec: float


def format_number(num: float) -> str:
    """Format a count with thousands separators"""
    return f"{num:,.0f}"


def format_time(ns: float) -> str:
    """Format a nanosecond duration in the largest fitting unit"""
    if ns < 1_000:
        return f"{ns:.2f} ns"
    elif ns < 1_000_000:
        return f"{ns / 1_000:.2f} μs"
    elif ns < 1_000_000_000:
        return f"{ns / 1_000_000:.2f} ms"
    return f"{ns / 1_000_000_000:.2f} s"


def run_benchmark(name: str, fn: Callable[[], object], iterations: int = 100_000) -> BenchmarkResult:
    """Warm up, then time `iterations` calls of fn"""
    for _ in range(WARMUP_ITERATIONS):
        fn()

    start = time.perf_counter_ns()
    for _ in range(iterations):
        fn()
    end = time.perf_counter_ns()

    total_ns = end - start
    avg_ns = total_ns / iterations
    ops_per_sec = 1_000_000_000 / avg_ns if avg_ns > 0 else float("inf")

    logger.info(f"\n{name}:")
    logger.info(f"  Total time: {format_time(total_ns)}")
    logger.info(f"  Average time: {format_time(avg_ns)}")
    logger.info(f"  Operations/sec: {format_number(ops_per_sec)}")
    logger.info(f"  Iterations: {format_number(iterations)}")

    return BenchmarkResult(
        name=name,
        iterations=iterations,
        total_ns=total_ns,
        avg_ns=avg_ns,
        ops_per_sec=ops_per_sec
    )


def measure_cache_effect(classifier: UrlClassifier, url: str, iterations: int) -> tuple:
    """Average ns per call with the cache cleared every call, then with a warm cache"""
    cache = classifier.cache

    cache.clear()
    start = time.perf_counter_ns()
    for _ in range(iterations):
        cache.clear()
        classifier.is_relative(url)
    miss_ns = (time.perf_counter_ns() - start) / iterations

    cache.clear()
    start = time.perf_counter_ns()
    for _ in range(iterations):
        classifier.is_relative(url)
    hit_ns = (time.perf_counter_ns() - start) / iterations

    return miss_ns, hit_ns


def run_all(classifier: UrlClassifier, iterations: int) -> List[BenchmarkResult]:
    """Run every scenario against classifier"""
    cache = classifier.cache
    is_relative = classifier.is_relative
    results = []

    def cold(url: str, options=None) -> Callable[[], bool]:
        def call():
            cache.clear()
            return is_relative(url, options)
        return call

    logger.info("\n--- Benchmark 1: Single URL Validation (no cache benefit) ---")
    for name, url in [
        ("Absolute URL (https)", "https://example.com"),
        ("Relative URL (path)", "/path/to/resource"),
        ("Protocol-relative URL", "//example.com"),
    ]:
        cache.clear()
        results.append(run_benchmark(name, cold(url), iterations))

    logger.info("\n--- Benchmark 2: Repeated URL Validation (with cache) ---")
    for name, url in [
        ("Repeated absolute URL (cache hit)", "https://example.com"),
        ("Repeated relative URL (cache hit)", "/path/to/resource"),
    ]:
        cache.clear()
        results.append(run_benchmark(name, lambda url=url: is_relative(url), iterations))

    logger.info("\n--- Benchmark 3: Mixed Workload ---")
    cache.clear()
    counter = iter(range(sys.maxsize))
    results.append(run_benchmark(
        "Random URLs from test set",
        lambda: is_relative(TEST_URLS[next(counter) % len(TEST_URLS)]),
        iterations
    ))

    logger.info("\n--- Benchmark 4: With Options ---")
    for name, allow in [
        ("With allowProtocolRelative: false", False),
        ("With allowProtocolRelative: true (default)", True),
    ]:
        cache.clear()
        results.append(run_benchmark(
            name,
            cold("//example.com", {"allow_protocol_relative": allow}),
            iterations
        ))

    logger.info("\n--- Benchmark 5: Fast Path Performance ---")
    for name, url in [
        ("Empty string (fast path)", ""),
        ("Common protocol http:// (fast path)", "http://example.com"),
        ("Common protocol https:// (fast path)", "https://example.com/path"),
        ("Data URI (fast path)", "data:text/plain,Hello"),
    ]:
        cache.clear()
        results.append(run_benchmark(name, cold(url), iterations))

    return results


def main(argv: Optional[List[str]] = None) -> bool:
    parser = argparse.ArgumentParser(description="Benchmark relative URL detection")
    parser.add_argument(
        "--iterations",
        type=int,
        default=100_000,
        help="Measured calls per scenario (default: 100000)"
    )
    parser.add_argument(
        "--cache-size",
        type=int,
        default=None,
        help=f"Verdict cache capacity (default: shared cache, {settings.cache_max_size} entries)"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if args.iterations < 1:
        logger.error(f"--iterations must be positive, got {args.iterations}")
        return False

    if args.cache_size is None:
        classifier = default_classifier
    else:
        try:
            classifier = UrlClassifier(cache=LRUCache(max_size=args.cache_size))
        except ValueError as e:
            logger.error(f"❌ Invalid cache size: {e}")
            return False

    logger.info("=" * 60)
    logger.info("URL Validation Performance Benchmark")
    logger.info("=" * 60)

    run_all(classifier, args.iterations)

    logger.info("\n--- Benchmark 6: Cache Effectiveness ---")
    cache_iterations = min(args.iterations, 10_000)
    miss_ns, hit_ns = measure_cache_effect(classifier, "https://example.com/test/path", cache_iterations)
    speedup = miss_ns / hit_ns if hit_ns > 0 else float("inf")

    logger.info(f"\nCache miss (first call): {format_time(miss_ns)}")
    logger.info(f"Cache hit (repeated): {format_time(hit_ns)}")
    logger.info(f"Speedup: {speedup:.2f}x faster with cache")

    logger.info("\n" + "=" * 60)
    logger.info("Summary")
    logger.info("=" * 60)
    logger.info(f"  • Cache capacity: {format_number(classifier.cache.get_max_size())} entries")
    logger.info(f"  • Cache miss: ~{format_time(miss_ns)} per operation")
    logger.info(f"  • Cache hit: ~{format_time(hit_ns)} per operation")
    logger.info(f"  • Cache speedup: {speedup:.2f}x improvement")

    return True


def cli() -> None:
    success = main()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    cli()
