from __future__ import annotations
import argparse
from dataclasses import dataclass

DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10
DEFAULT_MINES = 10


class SettingsError(ValueError):
    pass


@dataclass(frozen=True)
class GameSettings:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    mines: int = DEFAULT_MINES

    @property
    def cells(self) -> int:
        return self.width * self.height

    def validate(self) -> 'GameSettings':
        # Mine placement never terminates unless at least one cell stays free
        if self.width <= 0 or self.height <= 0:
            raise SettingsError(f'board must be at least 1x1, got {self.width}x{self.height}')
        if not 0 < self.mines < self.cells:
            raise SettingsError(f'mines must be between 1 and {self.cells - 1}, got {self.mines}')
        return self


def _to_int(name: str, value) -> int:
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip(), 10)
    except ValueError:
        raise SettingsError(f'{name} must be a whole number, got {value!r}') from None


def parse_settings(width, height, mines) -> GameSettings:
    """Build validated settings from raw form or command-line values."""
    return GameSettings(_to_int('width', width), _to_int('height', height), _to_int('mines', mines)).validate()


def add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--width', type=int, default=DEFAULT_WIDTH)
    parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT)
    parser.add_argument('--mines', type=int, default=DEFAULT_MINES)
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed for mine placement; <0 uses OS entropy')


def settings_from_args(args: argparse.Namespace) -> GameSettings:
    return parse_settings(args.width, args.height, args.mines)


def seed_from_args(args: argparse.Namespace):
    return None if args.seed < 0 else args.seed
