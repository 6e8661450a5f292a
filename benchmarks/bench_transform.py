#!/usr/bin/env python3
"""
Transform performance benchmarks.

Measures lazy (take_one) and greedy (take_all) extraction throughput.
"""

import time
from collections import deque
from typing import Any

from data_transform import EndOfStream, Transform


class LineSplitter(Transform):
    """Byte-oriented line splitter used as the benchmark workload."""

    def __init__(self) -> None:
        self._partial = b""
        self._lines: deque[bytes] = deque()

    def handle_chunk(self, chunk: bytes | None = None) -> bytes | None:
        if chunk is not None:
            *complete, self._partial = (self._partial + chunk).split(b"\n")
            self._lines.extend(complete)
        if self._lines:
            return self._lines.popleft()
        return None

    def emit(self, items: Any) -> list[bytes]:
        return [b"".join(item + b"\n" for item in items)]

    def clone(self) -> "LineSplitter":
        return LineSplitter()


def generate_chunks(count: int, chunk_size: int = 7) -> list[Any]:
    """Generate a line stream cut into fixed-size chunks."""
    payload = b"".join(f"line {i}\n".encode() for i in range(count))
    chunks: list[Any] = [
        payload[i : i + chunk_size] for i in range(0, len(payload), chunk_size)
    ]
    chunks.append(EndOfStream())
    return chunks


def benchmark_take_one(iterations: int = 10_000) -> dict[str, Any]:
    """Benchmark lazy extraction."""
    chunks = generate_chunks(iterations)
    transform = LineSplitter()

    start = time.perf_counter()
    transform.feed(chunks)
    items = []
    while taken := transform.take_one():
        items.extend(taken)
    elapsed = time.perf_counter() - start

    return {
        "name": "take_one",
        "iterations": iterations,
        "items": len(items),
        "elapsed_seconds": elapsed,
        "throughput_ips": len(items) / elapsed,
        "latency_us": (elapsed / len(items)) * 1_000_000,
    }


def benchmark_take_all(iterations: int = 10_000) -> dict[str, Any]:
    """Benchmark greedy extraction."""
    chunks = generate_chunks(iterations)
    transform = LineSplitter()

    start = time.perf_counter()
    items = transform.take_all(chunks)
    elapsed = time.perf_counter() - start

    return {
        "name": "take_all",
        "iterations": iterations,
        "items": len(items),
        "elapsed_seconds": elapsed,
        "throughput_ips": len(items) / elapsed,
        "latency_us": (elapsed / len(items)) * 1_000_000,
    }


def benchmark_emit(iterations: int = 10_000) -> dict[str, Any]:
    """Benchmark serialization."""
    items = [f"line {i}".encode() for i in range(iterations)]
    transform = LineSplitter()

    start = time.perf_counter()
    chunks = transform.emit(items)
    elapsed = time.perf_counter() - start

    return {
        "name": "emit",
        "iterations": iterations,
        "items": len(items),
        "chunks": len(chunks),
        "elapsed_seconds": elapsed,
        "throughput_ips": len(items) / elapsed,
        "latency_us": (elapsed / len(items)) * 1_000_000,
    }


def run_benchmarks() -> None:
    """Run all benchmarks and print results."""
    print("=" * 60)
    print("Transform Benchmarks")
    print("=" * 60)
    print()

    for bench in (benchmark_take_one, benchmark_take_all, benchmark_emit):
        result = bench()
        print(f"{result['name']}:")
        print(f"  Iterations: {result['iterations']}")
        print(f"  Elapsed: {result['elapsed_seconds']:.4f}s")
        print(f"  Throughput: {result['throughput_ips']:.0f} items/sec")
        print(f"  Latency: {result['latency_us']:.2f} µs/item")
        print()


if __name__ == "__main__":
    run_benchmarks()
