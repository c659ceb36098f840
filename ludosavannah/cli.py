"""
Ludo Savannah CLI - Command-line interface.

Usage:
    ludosavannah serve [--host H] [--port P]       Run the room relay
    ludosavannah play [--players N] [--seed S]     Hot-seat game in the terminal
"""

import argparse
import sys
import time

from .config import Settings, configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Ludo Savannah - Ludo engine and room relay",
        prog="ludosavannah",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the room relay")
    serve_parser.add_argument("--host", help="Bind address (default: LUDO_HOST)")
    serve_parser.add_argument("--port", type=int, help="Port (default: LUDO_PORT)")

    # Play command
    play_parser = subparsers.add_parser("play", help="Hot-seat game in the terminal")
    play_parser.add_argument("--players", type=int, default=2, help="Number of players (2-4)")
    play_parser.add_argument("--seed", type=int, help="Dice seed for a reproducible game")
    play_parser.add_argument("--no-delay", action="store_true", help="Skip roll/skip pauses")

    args = parser.parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if args.command == "serve":
        cmd_serve(args, settings)
    elif args.command == "play":
        cmd_play(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args, settings: Settings):
    """Run the relay with uvicorn."""
    import uvicorn
    from .api.app import create_app

    host = args.host or settings.host
    port = args.port or settings.port
    print(f"Server running on http://{host}:{port}")
    uvicorn.run(create_app(settings=settings), host=host, port=port, log_level=settings.log_level.lower())


def cmd_play(args, settings: Settings):
    """Hot-seat game: everyone shares the keyboard."""
    from .engine_core import RandomDice
    from .session import GameLoop, LoopState

    if not 2 <= args.players <= 4:
        print("Error: --players must be between 2 and 4")
        sys.exit(1)

    roll_delay = 0 if args.no_delay else settings.roll_delay
    skip_delay = 0 if args.no_delay else settings.skip_delay

    loop = GameLoop.local(num_players=args.players, dice=RandomDice(args.seed))
    print(loop.state.last_action)

    while loop.loop_state != LoopState.GAME_OVER:
        player = loop.state.current_player
        print_board(loop)
        try:
            input(f"\n{player.name} ({player.color.value}, {player.animal.value}) - press Enter to roll ")
        except EOFError:
            print("\nBye!")
            return

        loop.begin_roll()
        time.sleep(roll_delay)
        result = loop.roll()
        print(result.message)

        if result.loop_state == LoopState.SKIP_PENDING:
            time.sleep(skip_delay)
            print(loop.skip().message)
            continue

        while loop.loop_state == LoopState.AWAITING_MOVE:
            choices = loop.movable_pawn_ids()
            for i, pawn_id in enumerate(choices, start=1):
                print(f"  {i}) {pawn_id} at {loop.state.get_pawn(pawn_id).position}")
            try:
                raw = input("Pick a pawn: ").strip()
            except EOFError:
                print("\nBye!")
                return
            if not raw.isdigit() or not 1 <= int(raw) <= len(choices):
                print("Pick one of the numbers above")
                continue
            result = loop.select(choices[int(raw) - 1])
            for change in result.changes:
                print(f"  - {change}")

    print(f"\n{loop.state.last_action}")


def print_board(loop):
    """One line per player with their pawn positions."""
    print()
    for player in loop.state.players:
        positions = ", ".join(
            "base" if p.in_base else "home" if p.finished else str(p.position)
            for p in loop.state.pawns_of(player.player_id)
        )
        print(f"  {player.name:<10} {player.color.value:<7} [{positions}]")


if __name__ == "__main__":
    main()
