"""
Cauldron CLI - Command-line interface for the engine.

Usage:
    cauldron play                  Play turns from stdin, write commands to stdout
    cauldron decide <turn_file>    Decide a single turn read from a file
    cauldron serve                 Run the HTTP API

Logs go to stderr; stdout carries only protocol commands.
"""

import argparse
import logging
import os
import sys


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Cauldron - Time-boxed decision engine for the brewing puzzle",
        prog="cauldron",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.getenv("CAULDRON_LOG_LEVEL", "WARNING"),
        help="Logging level (default: CAULDRON_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--timeout-ms", type=int, help="Per-turn search budget")
    parser.add_argument("--max-depth", type=int, help="Maximum search depth")
    parser.add_argument(
        "--strategy",
        choices=["breadth_first", "best_first"],
        help="Frontier discipline",
    )
    parser.add_argument("--weights", help="Scoring preset (balanced, greedy, patient)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    subparsers.add_parser("play", help="Play turns from stdin")

    # Decide command
    decide_parser = subparsers.add_parser("decide", help="Decide a single turn from a file")
    decide_parser.add_argument("turn_file", help="Path to a file holding one turn")
    decide_parser.add_argument("--verbose", "-v", action="store_true", help="Show search details")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    # Defaults bypass argparse choices
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "decide":
        cmd_decide(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def build_config(args):
    """Environment config with command-line overrides applied."""
    from .config import SearchConfig, SearchStrategy
    from .errors import ConfigError

    try:
        config = SearchConfig.from_env()
        overrides = {}
        if args.timeout_ms is not None:
            overrides["timeout_ms"] = args.timeout_ms
        if args.max_depth is not None:
            overrides["max_depth"] = args.max_depth
        if args.strategy:
            overrides["strategy"] = SearchStrategy(args.strategy)
        if args.weights:
            overrides["weights_preset"] = args.weights.lower()
        return config.with_overrides(**overrides) if overrides else config
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


def build_policy(config):
    """Search policy using the configured scoring preset."""
    from .bots.evaluator import HeuristicEvaluator
    from .bots.personality import get_personality
    from .bots.policy import SearchPolicy
    from .errors import ConfigError

    try:
        personality = get_personality(config.weights_preset)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    return SearchPolicy(config=config, evaluator=HeuristicEvaluator(personality.weights))


def cmd_play(args):
    """Play turns from stdin until end of input."""
    from .session import GameLoop

    config = build_config(args)
    loop = GameLoop(policy=build_policy(config), config=config)
    loop.run(sys.stdin, sys.stdout)


def cmd_decide(args):
    """Decide a single turn read from a file."""
    from .errors import CauldronError
    from .protocol import parse_turn
    from .session import GameLoop

    try:
        with open(args.turn_file, "r", encoding="utf-8") as f:
            snapshot = parse_turn(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.turn_file}", file=sys.stderr)
        sys.exit(1)
    except CauldronError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    config = build_config(args)
    loop = GameLoop(policy=build_policy(config), config=config)
    try:
        result = loop.play_turn(snapshot)
    except CauldronError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(result.command)
    if args.verbose:
        print(f"  {result.explanation}", file=sys.stderr)
        print(f"  Nodes evaluated: {result.evaluated_nodes}", file=sys.stderr)
        print(f"  Timed out: {result.timed_out}", file=sys.stderr)


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn", file=sys.stderr)
        sys.exit(1)

    from .api import create_app

    app = create_app(config=build_config(args))
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
