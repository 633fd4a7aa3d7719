"""
Orrery CLI - Command line interface for the planetary ephemeris.
"""

import argparse
import json
import logging
import sys

from orrery.exceptions import OrreryError


def _add_epoch(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--epoch",
        type=str,
        default=None,
        help="Time of query (ISO format, UTC). Defaults to now.",
    )


def main(argv=None):
    """Main entry point for the Orrery CLI."""
    parser = argparse.ArgumentParser(
        description="Orrery - Keplerian positions of the Solar System planets",
        prog="orrery",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Positions command
    positions_parser = subparsers.add_parser("positions", help="Angle and distance of every planet")
    _add_epoch(positions_parser)
    positions_parser.add_argument("--json", action="store_true", help="Print the positions as JSON")

    # Query command
    query_parser = subparsers.add_parser("query", help="Full orbital state of one planet")
    query_parser.add_argument("planet", type=str, help="Planet name")
    _add_epoch(query_parser)

    # Julian Day command
    jd_parser = subparsers.add_parser("jd", help="Julian Day of an instant")
    _add_epoch(jd_parser)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    from orrery.astro.elements import PLANET_INFO
    from orrery.astro.ephemeris import KeplerianEphemeris
    from orrery.astro.timescale import date_to_julian_day, ensure_datetime

    try:
        epoch = ensure_datetime(args.epoch)

        if args.command == "jd":
            print(f"{date_to_julian_day(epoch):.6f}")

        elif args.command == "positions":
            positions = KeplerianEphemeris().all_positions(epoch)
            if args.json:
                payload = {key: pos.model_dump() for key, pos in positions.items()}
                print(json.dumps({"epoch": epoch.isoformat(), "positions": payload}, indent=2))
            else:
                print(f"Epoch: {epoch.isoformat()}")
                for key, pos in positions.items():
                    info = PLANET_INFO.get(key)
                    name = info.name if info is not None else key
                    print(f"{name}: angle={pos.normalized_angle:.2f}°, distance={pos.r:.3f} AU")

        elif args.command == "query":
            state = KeplerianEphemeris().orbital_state(args.planet, epoch)
            if state is None:
                print(f"Error: Unknown planet: {args.planet}")
                return 1
            x_km, y_km, z_km = state.position().to_km()
            print(f"Planet: {state.planet}")
            print(f"Epoch: {epoch.isoformat()} (JD {state.jd:.6f})")
            print(f"Position (AU): x={state.x:.6f}, y={state.y:.6f}, z={state.z:.6f}")
            print(f"Position (km): x={x_km:.0f}, y={y_km:.0f}, z={z_km:.0f}")
            print(f"Distance: {state.r:.6f} AU")
            print(f"Angle: {state.angle:.4f}° (normalized {state.normalized_angle:.4f}°)")
            print(f"Anomalies (rad): M={state.M:.6f}, E={state.E:.6f}, nu={state.nu:.6f}")
            if not state.converged:
                print("Warning: Kepler solver did not converge")

    except OrreryError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
