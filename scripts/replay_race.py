"""
Generate telemetry dumps, distance charts or lightweight visual replays.

Examples:
    # Save the per-tick JSON for a distance match
    python scripts/replay_race.py --distance 1500 --dump replays/race_1500.json

    # Distance-over-time chart for every animal
    python scripts/replay_race.py --plot replays/profiles.png

    # Render a simple GIF of the opening race (requires matplotlib + pillow)
    python scripts/replay_race.py --animate replays/race.gif
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from animal_derby.engine import (  # noqa: E402
    DEFAULT_ROSTER,
    TOTAL_RACE_TIME,
    TelemetryCollector,
    TickSnapshot,
    run_headless,
)
from animal_derby.engine.motion import distance_at, raw_distance_at  # noqa: E402
from animal_derby.engine.race_loop import MAX_VISUAL_DISTANCE  # noqa: E402


def dump_frames(collector: TelemetryCollector, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        json.dump(collector.to_json_ready(), handle, indent=2, ensure_ascii=False)
    print(f"[replay] wrote {len(collector.frames)} frames to {output_path}")


def plot_profiles(output_path: Path, target_distance: Optional[float] = None) -> None:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    times = np.linspace(0.0, TOTAL_RACE_TIME, 401)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=(9, 6))
    for competitor in DEFAULT_ROSTER:
        smooth = [raw_distance_at(competitor.id, t) for t in times]
        line, = ax.plot(times, smooth, label=competitor.name, color=f"#{competitor.color:06X}")
        marks = np.arange(0, int(TOTAL_RACE_TIME) + 1, 5)
        ax.scatter(marks, [distance_at(competitor.id, t) for t in marks], s=12, color=line.get_color())
    if target_distance is not None:
        ax.axhline(target_distance, linestyle="--", color="red", linewidth=1.0, label=f"{int(target_distance)}m")
    ax.set_title("Distance over time")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Distance (m)")
    ax.set_xlim(0, TOTAL_RACE_TIME)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left")
    fig.savefig(str(output_path), dpi=120, bbox_inches="tight")
    plt.close(fig)
    print(f"[replay] saved chart to {output_path}")


def animate_snapshots(snapshots: List[TickSnapshot], output_path: Path, fps: int = 15) -> None:
    if not snapshots:
        raise RuntimeError("No snapshots to render.")

    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from matplotlib.animation import FuncAnimation, PillowWriter

    competitors = list(DEFAULT_ROSTER)
    lanes = np.arange(len(competitors))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=(10, 4))
    ax.set_xlim(0, MAX_VISUAL_DISTANCE)
    ax.set_ylim(-0.5, len(competitors) - 0.5)
    ax.set_yticks(lanes)
    ax.set_yticklabels([c.name for c in competitors])
    ax.invert_yaxis()
    ax.set_xlabel("Distance (m)")
    bars = ax.barh(lanes, np.zeros(len(competitors)), color=[f"#{c.color:06X}" for c in competitors])
    time_text = ax.text(0.01, 1.02, "", transform=ax.transAxes, fontsize=10)

    def update(snapshot: TickSnapshot):
        for bar, racer in zip(bars, snapshot.racers):
            bar.set_width(racer.distance)
        time_text.set_text(f"t={snapshot.time:.1f}s  tick={snapshot.tick}")
        return (*bars, time_text)

    animation = FuncAnimation(fig, update, frames=snapshots, interval=1000 / fps, blit=False)

    writer: Optional[object] = None
    if output_path.suffix.lower() in {".gif"}:
        writer = PillowWriter(fps=fps)
    kwargs = {"writer": writer} if writer else {}
    animation.save(str(output_path), fps=fps, **kwargs)
    plt.close(fig)
    print(f"[replay] saved animation to {output_path}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export or replay animal race telemetry.")
    parser.add_argument("--distance", type=float, help="Optional finish line for a distance match replay.")
    parser.add_argument("--multiplier", type=float, default=1.0, help="Simulated seconds per real second.")
    parser.add_argument("--dump", type=Path, help="Optional JSON file to dump frames.")
    parser.add_argument("--plot", type=Path, help="Optional PNG path for a distance-over-time chart.")
    parser.add_argument("--animate", type=Path, help="Optional MP4/GIF path for a simple replay (requires matplotlib).")
    parser.add_argument("--fps", type=int, default=15, help="Frames per second for ticks and animation (default: 15).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    collector = TelemetryCollector()
    snapshots = run_headless(
        target_distance=args.distance,
        speed_multiplier=args.multiplier,
        dt=1.0 / max(args.fps, 1),
        telemetry=collector,
    )

    if args.dump:
        dump_frames(collector, args.dump)
    if args.plot:
        plot_profiles(args.plot, args.distance)
    if args.animate:
        animate_snapshots(snapshots, args.animate, fps=args.fps)
    if not (args.dump or args.plot or args.animate):
        dump_frames(collector, Path("replays") / "race_telemetry.json")


if __name__ == "__main__":
    main()
