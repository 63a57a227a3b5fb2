"""
Performance Benchmark
=====================

Measures headless simulation throughput (frames per second) and
snapshot / solid-render cost.

Usage:
    python -m tools.benchmark_speed [--frames F] [--seed S] [--quick]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from packet_router.router_core.config_loader import load_config
from packet_router.router_core.high_score import MemoryHighScoreStore
from packet_router.router_core.input_handler import Direction
from packet_router.router_core.render_solid import SolidRenderer
from packet_router.router_core.session import GameSession


def _scripted_session(seed: int) -> GameSession:
    session = GameSession(config=load_config(), seed=seed, store=MemoryHighScoreStore())
    session.start()
    return session


def _scripted_input(session: GameSession, rng: np.random.Generator) -> None:
    """Random walk on the router, one key press every few frames."""
    roll = rng.random()
    if roll < 0.15:
        session.move(Direction.LEFT)
    elif roll < 0.30:
        session.move(Direction.RIGHT)


def benchmark_session(
    num_frames: int = 10000,
    seed: int = 42
) -> dict:
    """
    Benchmark raw GameSession frame throughput.

    Args:
        num_frames: Number of frames to simulate.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    session = _scripted_session(seed)
    rng = np.random.default_rng(seed)

    games = 1
    start = time.perf_counter()

    for _ in range(num_frames):
        _scripted_input(session, rng)
        session.run_frames(1)
        if session.is_over:
            session.restart()
            games += 1

    elapsed = time.perf_counter() - start
    info = session.get_info()
    session.close()

    return {
        "mode": "session",
        "num_frames": num_frames,
        "games": games,
        "high_score": info["high_score"],
        "sim_time_ms": info["time_ms"],
        "final_info": info,
        "elapsed_seconds": elapsed,
        "frames_per_second": num_frames / elapsed,
        "ms_per_frame": (elapsed * 1000) / num_frames
    }


def benchmark_render(
    num_frames: int = 1000,
    seed: int = 42,
    width: int = 250,
    height: int = 300
) -> dict:
    """
    Benchmark snapshot + SolidRenderer per frame.

    Args:
        num_frames: Number of frames to simulate and render.
        seed: Random seed.
        width: Output image width.
        height: Output image height.

    Returns:
        Dict with timing results.
    """
    session = _scripted_session(seed)
    renderer = SolidRenderer(session.config)
    rng = np.random.default_rng(seed)

    start = time.perf_counter()

    for _ in range(num_frames):
        _scripted_input(session, rng)
        session.run_frames(1)
        if session.is_over:
            session.restart()
        renderer.render(session.snapshot(), width, height)

    elapsed = time.perf_counter() - start
    session.close()

    return {
        "mode": "session+render",
        "num_frames": num_frames,
        "elapsed_seconds": elapsed,
        "frames_per_second": num_frames / elapsed,
        "ms_per_frame": (elapsed * 1000) / num_frames
    }


def run_all_benchmarks(frames: int = 10000, seed: int = 42) -> list:
    """Run both benchmarks and print a summary."""
    results = []

    print("=" * 60)
    print("PACKET ROUTER PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    print("Benchmarking GameSession (headless)...")
    result = benchmark_session(num_frames=frames, seed=seed)
    results.append(result)
    print(f"  Frames/sec: {result['frames_per_second']:.1f}")
    print(f"  ms/frame:   {result['ms_per_frame']:.4f}")
    print(f"  Games:      {result['games']} (best score {result['high_score']})")
    print(f"  Sim time:   {result['sim_time_ms'] / 1000:.1f}s of game time")
    print(f"  Last state: {result['final_info']}")
    print()

    render_frames = max(1, frames // 10)
    print("Benchmarking GameSession + SolidRenderer...")
    result = benchmark_render(num_frames=render_frames, seed=seed)
    results.append(result)
    print(f"  Frames/sec: {result['frames_per_second']:.1f}")
    print(f"  ms/frame:   {result['ms_per_frame']:.4f}")
    print()

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print()
    print(f"{'Mode':<20} {'Frames':>8} {'Frames/s':>12} {'ms/frame':>10}")
    print("-" * 54)

    for r in results:
        print(f"{r['mode']:<20} {r['num_frames']:>8} "
              f"{r['frames_per_second']:>12.1f} {r['ms_per_frame']:>10.4f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Packet Router simulation performance")
    parser.add_argument("--frames", type=int, default=10000, help="Frames per benchmark")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer frames)")

    args = parser.parse_args()

    frames = 1000 if args.quick else args.frames

    run_all_benchmarks(frames=frames, seed=args.seed)

    return 0


if __name__ == "__main__":
    sys.exit(main())
