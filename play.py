from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional, Tuple

from minefield.engine import GameManager, GamePhase
from minefield.settings import SettingsError, add_settings_arguments, settings_from_args, seed_from_args
from minefield.views import render_ascii

USAGE = 'commands: r ROW COL (reveal) | f ROW COL (flag) | n (new game) | q (quit)'
GAME_OVER = 'game over, n for a new game'

Command = Tuple[str, Optional[Tuple[int, int]]]


def parse_command(line: str) -> Optional[Command]:
    parts = line.split()
    if not parts:
        return None
    kind = parts[0].lower()
    if kind in ('n', 'q'):
        return (kind, None) if len(parts) == 1 else None
    if kind not in ('r', 'f') or len(parts) != 3:
        return None
    try:
        row, col = int(parts[1]), int(parts[2])
    except ValueError:
        return None
    return (kind, (row, col))


class ConsoleGame:
    def __init__(self, settings, seed=None, out=sys.stdout):
        self.settings = settings
        self.out = out
        self.ended = False
        # The board is printed whole after each command, so per-tile repaints are not needed
        self.game = GameManager(lambda tile, coord: None, self._on_game_end, seed=seed)
        self.new_game()

    def new_game(self) -> None:
        s = self.settings
        self.ended = False
        self.game.reset(s.width, s.height, s.mines)

    def _on_game_end(self, phase: GamePhase) -> None:
        self.ended = True
        print(render_ascii(self.game, reveal_all=True), file=self.out)
        print('WIN' if phase == GamePhase.WON else 'LOSE', file=self.out)

    def handle(self, line: str) -> bool:
        """Apply one command; returns False once the player quits."""
        command = parse_command(line)
        if command is None:
            print(USAGE, file=self.out)
            return True
        kind, coord = command
        if kind == 'q':
            return False
        if kind != 'n' and self.ended:
            print(GAME_OVER, file=self.out)
            return True
        if kind == 'n':
            self.new_game()
        elif kind == 'r':
            self.game.reveal(coord)
        else:
            self.game.toggle_flag(coord)
        if not self.ended:
            print(render_ascii(self.game), file=self.out)
            print(f'mines left: {self.game.remaining_mines}', file=self.out)
        print(file=self.out)
        return True


def main():
    parser = argparse.ArgumentParser()
    add_settings_arguments(parser)
    parser.add_argument('--verbose', action='store_true')
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        settings = settings_from_args(args)
    except SettingsError as e:
        parser.error(str(e))

    console = ConsoleGame(settings, seed=seed_from_args(args))
    print(render_ascii(console.game))
    print(USAGE)
    for line in sys.stdin:
        if not console.handle(line):
            break


if __name__ == '__main__':
    main()
