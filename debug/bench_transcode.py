#!/usr/bin/env python3
"""Quick throughput comparison across worker counts - direct timing only"""
import os
import time

import parab64


PAYLOAD = os.urandom(32 * 1024 * 1024)


def bench(workers: int):
    start = time.perf_counter()
    encoded = parab64.encode_bytes(PAYLOAD, workers=workers)
    mid = time.perf_counter()
    decoded = parab64.decode_bytes(encoded, workers=workers)
    end = time.perf_counter()
    assert decoded == PAYLOAD
    return mid - start, end - mid


def main():
    print(f"Input size: {len(PAYLOAD) // (1024 * 1024)} MiB\n")
    for workers in (1, 2, 4, 8):
        enc, dec = bench(workers)
        print(f"  workers={workers}: encode {enc:.3f}s  decode {dec:.3f}s")
    print("\n✅ benchmark complete")


if __name__ == '__main__':
    main()
