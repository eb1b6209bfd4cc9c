#!/usr/bin/env python3
"""
Development Mode Game Launcher

Runs a mini-game in a pygame window with keyboard and mouse input.

Uses the game registry for auto-discovery. Game-specific arguments are
loaded from each game class's ARGUMENTS list.

Usage:
    # List available games
    python dev_game.py --list

    # Play a game
    python dev_game.py core_protector
    python dev_game.py lane_switch --lanes 4

    # Reproducible spawns, custom high-score file
    python dev_game.py gap_hop --seed 42 --scores /tmp/scores.json

    # With custom resolution
    python dev_game.py orbit_dodge --resolution 1920x1080
"""
import argparse
import os
import sys

import pygame

# Ensure project root is on path
_project_root = os.path.dirname(os.path.abspath(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from games.registry import get_registry
from minigames import config
from minigames.commands import CommandType
from minigames.game_state import GameState
from minigames.input import PygameInputSource
from minigames.logging import get_logger
from minigames.loop import GameLoopController
from minigames.render import SnapshotRenderer
from minigames.storage import JsonFileStore

log = get_logger('dev_game')


def main():
    """Main entry point for development game launcher."""

    registry = get_registry()
    available_games = registry.list_games()

    # Phase 1: Parse just enough to identify the game
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument('game', nargs='?', choices=available_games)
    pre_args, _ = pre_parser.parse_known_args()

    # Phase 2: Build full parser with game-specific arguments
    parser = argparse.ArgumentParser(
        description='Development Mode Game Launcher',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available games: {', '.join(available_games)}

Controls:
  Arrows / A D     move        Space / W / click   action
  P / Esc          pause       R / Enter           restart
  Q                quit
        """
    )
    parser.add_argument('game', nargs='?', choices=available_games, help='Game to play')
    parser.add_argument('--list', '-l', action='store_true',
                        help='List all available games and exit')
    parser.add_argument('--resolution', '-r', type=str,
                        default=f'{config.SCREEN_WIDTH}x{config.SCREEN_HEIGHT}',
                        help='Window resolution as WIDTHxHEIGHT')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for reproducible spawns')
    parser.add_argument('--scores', type=str, default=config.HIGH_SCORES_PATH,
                        help='High score JSON file')

    if pre_args.game:
        for arg_def in registry.get_game_arguments(pre_args.game):
            kwargs = {k: arg_def[k] for k in ('type', 'default', 'help', 'action', 'choices')
                      if k in arg_def}
            if 'action' in kwargs:
                kwargs.pop('type', None)  # action and type are mutually exclusive
            parser.add_argument(arg_def['name'], **kwargs)

    args = parser.parse_args()

    if args.list:
        print("\nAvailable Games (Development Mode)")
        print("=" * 50)
        for game_id in available_games:
            info = registry.get_game_info(game_id)
            print(f"\n  {game_id}")
            print(f"    Name: {info.name}")
            print(f"    Description: {info.description}")
            print(f"    Version: {info.version}")
            print(f"    Options: {', '.join(a['name'] for a in info.arguments)}")
        print()
        return 0

    if args.game is None:
        parser.print_help()
        return 1

    try:
        width, height = (int(v) for v in args.resolution.split('x'))
    except ValueError:
        print(f"Invalid resolution format: {args.resolution}")
        print("Expected format: WIDTHxHEIGHT (e.g., 1920x1080)")
        return 1

    skip_args = {'game', 'list', 'resolution', 'seed', 'scores'}
    game_kwargs = {k: v for k, v in vars(args).items() if k not in skip_args and v is not None}

    game = registry.create_game(args.game, width, height, **game_kwargs)

    pygame.init()
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(f"{game.NAME} - Development Mode")

    renderer = SnapshotRenderer(screen, title=game.NAME)
    controller = GameLoopController(
        game,
        store=JsonFileStore(args.scores),
        render=renderer,
        seed=args.seed,
    )
    source = PygameInputSource(pointer=game.POINTER_INPUT)

    print("=" * 60)
    print(f"Development Mode: {game.NAME}")
    print(f"Resolution: {width}x{height}   Seed: {controller.seed}")
    print("=" * 60)

    controller.start()
    clock = pygame.time.Clock()
    error_shown = False
    try:
        while not controller.quit_requested:
            clock.tick(config.TARGET_FPS)
            source.update()
            for command in source.poll_commands():
                if command.type is CommandType.QUIT:
                    controller.quit()
                else:
                    controller.dispatch(command)
            controller.tick()

            # ERROR is terminal; leave the window up until the user quits
            if controller.state is GameState.ERROR and not error_shown:
                error_shown = True
                log.error("Game stopped: %s", controller.last_error)
                if controller.world is not None:
                    renderer.draw(controller.snapshot())
    finally:
        pygame.quit()

    return 0 if controller.last_error is None else 1


if __name__ == '__main__':
    sys.exit(main())
