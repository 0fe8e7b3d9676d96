from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

from polyview import Point, PlotSession, PointerEvent, write_point_file


def build_points(count: int = 40) -> list[Point]:
    # Damped sine sampled over two periods.
    out: list[Point] = []
    for i in range(count):
        x = i * (4.0 * math.pi) / (count - 1)
        out.append(Point(x, math.exp(-0.15 * x) * math.sin(x)))
    return out


def main() -> None:
    parser = argparse.ArgumentParser(description="Write a sample point file and render it before and after a zoom.")
    parser.add_argument("--out-dir", type=Path, default=Path("zoom_demo_out"))
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    data = write_point_file(args.out_dir / "damped_sine.bin", build_points())
    session = PlotSession(canvas_size=(800, 600))
    session.load_file(data)
    session.save_png(args.out_dir / "initial.png")

    for event in (PointerEvent.press(150, 150), PointerEvent.move(450, 420), PointerEvent.release(450, 420)):
        session.handle_event(event)
    session.handle_event(PointerEvent.move(400, 300))
    session.save_png(args.out_dir / "zoomed.png")

    session.handle_event(PointerEvent.press(0, 0, button="secondary"))
    session.save_png(args.out_dir / "reset.png")
    print(f"wrote renders to {args.out_dir}")


if __name__ == "__main__":
    main()
