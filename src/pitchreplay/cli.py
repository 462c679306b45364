"""Command-line interface for pitchreplay."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .catalog import discover_matches, team_acronym
from .config import (
    ConfigError,
    PitchReplayConfig,
    get_default_config_path,
    load_config,
)
from .config_templates import CONFIG_TEMPLATE
from .errors import PitchReplayError
from .export import record_playback, write_snapshot_atomically
from .parser import get_adapter
from .parser.types import Period
from .schema import validate_snapshot
from .set_pieces import event_types
from .sync import SyncManager


def _print_error(e: Exception, as_json: bool) -> None:
    if as_json:
        error_result = {
            "error": {
                "type": type(e).__name__,
                "message": str(e),
                "details": getattr(e, "details", {}),
            },
            "status": "error",
        }
        print(json.dumps(error_result, indent=2, default=str))
    else:
        print(f"Error: {e}", file=sys.stderr)
        details = getattr(e, "details", {})
        if "suggested_action" in details:
            print(f"Suggestion: {details['suggested_action']}", file=sys.stderr)


def _resolve_config(args) -> PitchReplayConfig:
    """Explicit --config must exist; the default path is optional."""
    if args.config:
        config = load_config(Path(args.config).expanduser())
    else:
        default_path = get_default_config_path()
        config = load_config(default_path) if default_path.exists() else PitchReplayConfig()

    if args.data_dir:
        config.paths.data_dir = Path(args.data_dir).expanduser()
    config.validate()
    return config


def _build_manager(config: PitchReplayConfig) -> SyncManager:
    adapter = get_adapter(config.playback.adapter, data_dir=config.paths.data_dir)
    return SyncManager(adapter, config.playback, config.alignment.to_table())


def handle_config_command(args) -> int:
    """Handle the config subcommand."""
    config_path = Path(args.config).expanduser() if args.config else get_default_config_path()

    if args.init:
        if config_path.exists():
            print(f"Config already exists at {config_path}")
            return 1
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(CONFIG_TEMPLATE)
        print(f"Created config template at {config_path}")
        print("Edit the file to point at your data directory.")
        return 0

    if args.validate:
        try:
            config = load_config(config_path)
            config.validate()
        except ConfigError as e:
            print(f"Config error: {e}")
            return 1
        print(f"Config at {config_path} is valid.")
        return 0

    print(f"Config path: {config_path}")
    return 0


def handle_matches_command(args) -> int:
    """List the matches found in the data directory."""
    config = _resolve_config(args)
    adapter = get_adapter(config.playback.adapter, data_dir=config.paths.data_dir)
    summaries = discover_matches(adapter)

    if args.json:
        print(
            json.dumps(
                [
                    {
                        "match_id": s.match_id,
                        "home_team": s.home_team,
                        "away_team": s.away_team,
                        "label": s.label,
                    }
                    for s in summaries
                ],
                indent=2,
            )
        )
        return 0

    if not summaries:
        print(f"No matches found in {config.paths.data_dir}")
        return 1
    for s in summaries:
        print(f"{s.match_id:>8}  {s.label:<12} {s.home_team} vs {s.away_team}")
    return 0


def handle_inspect_command(args) -> int:
    """Load one match and describe what playback would show."""
    config = _resolve_config(args)
    manager = _build_manager(config)
    manager.load_match(args.match_id)

    metadata = manager.metadata
    timeline = manager.timeline
    ranges = {period.value: timeline.compute_range(period) for period in Period}
    failed = [tracked.entity_id for tracked in timeline.entities if tracked.failed]
    result = {
        "match_id": metadata.match_id,
        "home_team": metadata.home_team,
        "away_team": metadata.away_team,
        "pitch": [metadata.pitch_length, metadata.pitch_width],
        "entities": len(timeline),
        "failed_entities": failed,
        "ranges": {key: list(value) for key, value in ranges.items()},
        "set_piece_types": event_types(manager.events),
        "warnings": manager.warnings,
    }

    if args.json:
        print(json.dumps(result, indent=2))
        return 0

    print(
        f"Match {metadata.match_id}: {metadata.home_team} "
        f"({team_acronym(metadata.home_team)}) vs {metadata.away_team} "
        f"({team_acronym(metadata.away_team)})"
    )
    if metadata.has_pitch_size:
        print(f"Pitch: {metadata.pitch_length} x {metadata.pitch_width}")
    print(f"Tracked entities: {len(timeline)}")
    for key, (range_min, range_max) in ranges.items():
        print(f"  {key}: {range_min:.2f}s - {range_max:.2f}s")
    if failed:
        print(f"Hidden entities: {', '.join(str(i) for i in failed)}")
    if result["set_piece_types"]:
        print(f"Set pieces: {', '.join(result['set_piece_types'])}")
    if manager.warnings:
        print("\nWarnings:")
        for warning in manager.warnings:
            print(f"  - {warning}")
    return 0


def handle_replay_command(args) -> int:
    """Run headless playback and write the captured snapshots."""
    config = _resolve_config(args)
    manager = _build_manager(config)
    manager.load_match(args.match_id)

    if args.period:
        manager.switch_period(Period.from_indicator(args.period))
    if args.speed is not None:
        manager.set_speed(args.speed)
    if args.start:
        manager.scrub_to(args.start)
    if args.set_piece:
        manager.visualize_set_pieces(args.set_piece, args.team)

    document = record_playback(manager, args.seconds, fps=args.fps, every=args.every)
    validate_snapshot(document)

    if args.out:
        out_path = Path(args.out)
        write_snapshot_atomically(document, out_path, pretty=args.pretty)
        print(f"Snapshots written to: {out_path}")
    else:
        print(json.dumps(document, indent=2 if args.pretty else None))
    return 0


def handle_set_pieces_command(args) -> int:
    """List a match's set pieces on the tracking clock."""
    config = _resolve_config(args)
    manager = _build_manager(config)
    manager.load_match(args.match_id)

    events = manager.events
    if args.type:
        events = [event for event in events if event.type == args.type]
    if args.team:
        events = [event for event in events if event.team == args.team]

    if args.json:
        print(
            json.dumps(
                [
                    {
                        "match_id": event.match_id,
                        "timestamp": event.timestamp,
                        "local_start": event.local_start,
                        "period": event.period.value,
                        "type": event.type,
                        "team": event.team,
                        "player": event.player,
                        "accurate": event.accurate,
                        "duration": event.duration,
                    }
                    for event in events
                ],
                indent=2,
            )
        )
        return 0

    for event in events:
        outcome = "accurate" if event.accurate else "inaccurate"
        print(
            f"{event.period.value} {event.local_start:8.2f}s  {event.type:<12} "
            f"{event.team:<20} {event.player} ({outcome})"
        )
    for warning in manager.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=str, help="Path to config.toml")
    parser.add_argument("--data-dir", type=str, help="Override the data directory")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in machine-readable JSON format",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="pitchreplay",
        description="Playback engine for football tracking data",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pitchreplay {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    matches_parser = subparsers.add_parser(
        "matches", help="List matches available in the data directory"
    )
    _add_common_arguments(matches_parser)

    inspect_parser = subparsers.add_parser(
        "inspect", help="Load a match and summarize its tracking data"
    )
    inspect_parser.add_argument("match_id", type=int, help="Match id")
    _add_common_arguments(inspect_parser)

    replay_parser = subparsers.add_parser(
        "replay", help="Play a match headlessly and write position snapshots"
    )
    replay_parser.add_argument("match_id", type=int, help="Match id")
    replay_parser.add_argument(
        "--seconds", type=float, default=10.0, help="Wall-clock seconds to play (default: 10)"
    )
    replay_parser.add_argument(
        "--fps", type=float, default=25.0, help="Ticks per second (default: 25)"
    )
    replay_parser.add_argument(
        "--every", type=int, default=1, help="Keep every n-th tick (default: 1)"
    )
    replay_parser.add_argument("--speed", type=float, help="Speed multiplier (0, 0.5, 1, 2, 4)")
    replay_parser.add_argument("--period", type=str, choices=["1H", "2H"], help="Period")
    replay_parser.add_argument("--start", type=float, default=0.0, help="Start time in seconds")
    replay_parser.add_argument("--set-piece", type=str, help="Also replay set pieces of this type")
    replay_parser.add_argument("--team", type=str, help="Set piece team filter")
    replay_parser.add_argument("--out", type=str, help="Write snapshots to this JSON file")
    replay_parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    _add_common_arguments(replay_parser)

    set_pieces_parser = subparsers.add_parser(
        "set-pieces", help="List a match's set pieces on the tracking clock"
    )
    set_pieces_parser.add_argument("match_id", type=int, help="Match id")
    set_pieces_parser.add_argument("--type", type=str, help="Only this set piece type")
    set_pieces_parser.add_argument("--team", type=str, help="Only this team")
    _add_common_arguments(set_pieces_parser)

    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("--config", type=str, help="Path to config.toml")
    config_parser.add_argument("--init", action="store_true", help="Create config template")
    config_parser.add_argument("--validate", action="store_true", help="Validate config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "config":
        return handle_config_command(args)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "matches": handle_matches_command,
        "inspect": handle_inspect_command,
        "replay": handle_replay_command,
        "set-pieces": handle_set_pieces_command,
    }
    try:
        return handlers[args.command](args)
    except PitchReplayError as e:
        _print_error(e, args.json)
        return 1
    except Exception as e:
        if args.json:
            error_result = {
                "error": {
                    "type": "UnexpectedError",
                    "message": f"Unexpected error: {str(e)}",
                    "details": {},
                },
                "status": "error",
            }
            print(json.dumps(error_result, indent=2))
        else:
            print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
