"""Micro-benchmarks for scan + decode on synthetic images."""

from __future__ import annotations

import io
import time

from iptcinfo.decoder import decode
from iptcinfo.scanner import scan
from iptcinfo.synthetic import generate_synthetic_image


def benchmark_decode(images: int = 1000, runs: int = 3) -> dict[str, float]:
    streams = [generate_synthetic_image(seed=i, prefix_bytes=i % 400)[0] for i in range(images)]
    total_bytes = sum(len(s) for s in streams)
    best = None
    for _ in range(runs):
        start = time.perf_counter()
        for stream in streams:
            source = io.BytesIO(stream)
            scan(source)
            decode(source)
        elapsed = time.perf_counter() - start
        best = elapsed if best is None or elapsed < best else best
    mbps = (total_bytes / 1_000_000) / best if best else 0.0
    return {"images": images, "bytes": total_bytes, "best_seconds": best or 0.0, "mbps": mbps}


if __name__ == "__main__":
    result = benchmark_decode()
    print(result)
