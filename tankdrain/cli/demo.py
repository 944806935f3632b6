# cli/demo.py   (внешний скрипт запуска)

from __future__ import annotations

import argparse
import logging

from tankdrain import Conical, Cylindrical, DrainAnalyzer, DrainSettings, Spherical

# Эталонные постановки: (геометрия, h0, T)
SCENARIOS = {
    "cylindrical": (Cylindrical(radius=1.0), 5.0, 40.0),
    "conical": (Conical(radius=2.0, height=5.0), 5.0, 40.0),
    "spherical": (Spherical(radius=2.5), 5.0, 70.0),
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate gravity drainage of a tank.")
    parser.add_argument("shape", choices=sorted(SCENARIOS), help="Tank shape to simulate.")
    parser.add_argument("--total-time", type=float, default=None, help="Target drain time, s.")
    parser.add_argument("--initial-height", type=float, default=None, help="Initial liquid height, m.")
    parser.add_argument("--calibrator", choices=["closed_form", "search", "fixed"], default=None)
    parser.add_argument("--max-iterations", type=int, default=None, help="Search iteration cap.")
    parser.add_argument("--plot", action="store_true", help="Show height and volume plots.")
    parser.add_argument("--animate", action="store_true", help="Play the drainage in real time.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    geom, h0, total = SCENARIOS[args.shape]
    overrides = {}
    if args.max_iterations is not None:
        overrides["max_iterations"] = args.max_iterations
    settings = DrainSettings.from_mapping(overrides)

    analyzer = DrainAnalyzer(
        geom,
        total_time=args.total_time or total,
        initial_height=args.initial_height or h0,
        settings=settings,
    )
    report = analyzer.simulate(args.calibrator)

    summary = report.summary()
    print(f"Calculated hole size: {summary['outlet_area']:.6f} m²")
    print(f"Final height at {summary['total_time']:g} seconds: {summary['final_height']:.4f} m")
    if summary["drain_time"] is not None:
        print(f"Tank drains in approximately {summary['drain_time']:.1f} seconds")
    else:
        print("Tank does not fully drain within the simulated span")
    print(analyzer.table(report).iloc[:: max(1, len(report.trajectory) // 20)])

    if args.plot:
        analyzer.plot_height(report)
        analyzer.plot_volume(report)
    if args.animate:
        analyzer.animate(report)


if __name__ == "__main__":
    main()
