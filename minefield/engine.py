from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Tuple

from .settings import GameSettings

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]

MINE = -1


class TileState(IntEnum):
    HIDDEN = 0
    VISIBLE = 1
    FLAGGED = 2


class GamePhase(IntEnum):
    NOT_INITIALIZED = 0
    IN_PROGRESS = 1
    WON = 2
    LOST = 3


@dataclass
class Tile:
    # -1 means mine, otherwise the number of adjacent mines
    number: int = 0
    state: TileState = TileState.HIDDEN

    @property
    def is_mine(self) -> bool:
        return self.number == MINE


TileCallback = Callable[[Tile, Coordinate], None]
GameEndCallback = Callable[[GamePhase], None]

_OFFSETS = [(dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dy, dx) != (0, 0)]


def _around(coord: Coordinate) -> List[Coordinate]:
    # All 8 surrounding coordinates, out-of-bounds ones included
    y, x = coord
    return [(y + dy, x + dx) for dy, dx in _OFFSETS]


def _next_flag_state(state: TileState) -> TileState:
    if state == TileState.HIDDEN:
        return TileState.FLAGGED
    if state == TileState.FLAGGED:
        return TileState.HIDDEN
    return state


class GameManager:
    """Owns the tile grid of one game and drives it through its phases.

    Mines are placed on the first reveal so that the first revealed tile is
    never a mine. Every repaint goes through ``on_tile_changed`` and the end
    of a game through ``on_game_end``; the engine never draws anything itself.
    """

    def __init__(self, on_tile_changed: TileCallback, on_game_end: GameEndCallback,
                 seed: Optional[int] = None, rng=None):
        self.on_tile_changed = on_tile_changed
        self.on_game_end = on_game_end
        if seed is not None and rng is not None:
            raise ValueError('pass either seed or rng, not both')
        if rng is None:
            rng = random.Random(int(seed)) if seed is not None else random.Random()
        self.rng = rng
        self.field: List[List[Tile]] = []
        self._mines = 0
        self._flags = 0
        self._revealed = 0
        self._phase = GamePhase.NOT_INITIALIZED

    @property
    def height(self) -> int:
        return len(self.field)

    @property
    def width(self) -> int:
        return len(self.field[0]) if self.field else 0

    @property
    def mines(self) -> int:
        return self._mines

    @property
    def flags(self) -> int:
        return self._flags

    @property
    def revealed(self) -> int:
        return self._revealed

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def remaining_mines(self) -> int:
        return self._mines - self._flags

    @property
    def is_over(self) -> bool:
        return self._phase in (GamePhase.WON, GamePhase.LOST)

    def in_bounds(self, coord: Coordinate) -> bool:
        y, x = coord
        return 0 <= y < self.height and 0 <= x < self.width

    def tile(self, coord: Coordinate) -> Optional[Tile]:
        if not self.in_bounds(coord):
            return None
        return self.field[coord[0]][coord[1]]

    def neighbors(self, coord: Coordinate) -> List[Coordinate]:
        return [c for c in _around(coord) if self.in_bounds(c)]

    def draw_grid(self) -> None:
        for y, row in enumerate(self.field):
            for x, tile in enumerate(row):
                self.on_tile_changed(tile, (y, x))

    def reset(self, width: int, height: int, mines: int) -> None:
        GameSettings(width, height, mines).validate()
        self._mines = mines
        self._flags = 0
        self._revealed = 0
        self._phase = GamePhase.NOT_INITIALIZED
        self.field = [[Tile() for _ in range(width)] for _ in range(height)]
        logger.debug('new %dx%d game with %d mines', width, height, mines)
        self.draw_grid()

    def _place_mines(self, safe: Coordinate) -> None:
        height, width = self.height, self.width
        for _ in range(self._mines):
            while True:
                coord = (self.rng.randrange(height), self.rng.randrange(width))
                if coord != safe and not self.field[coord[0]][coord[1]].is_mine:
                    break
            self.field[coord[0]][coord[1]].number = MINE
            for ny, nx in self.neighbors(coord):
                neighbor = self.field[ny][nx]
                if not neighbor.is_mine:
                    neighbor.number += 1
        self._phase = GamePhase.IN_PROGRESS
        logger.debug('placed %d mines around safe cell %s', self._mines, safe)

    def _flood(self, start: Coordinate) -> None:
        stack = [start]
        while stack:
            coord = stack.pop()
            tile = self.tile(coord)
            if tile is None or tile.state != TileState.HIDDEN:
                continue
            if tile.is_mine:
                self._phase = GamePhase.LOST
                logger.debug('mine revealed at %s', coord)
            tile.state = TileState.VISIBLE
            self.on_tile_changed(tile, coord)
            self._revealed += 1
            if tile.number == 0:
                stack.extend(_around(coord))

    def flagged_around(self, coord: Coordinate) -> int:
        return sum(1 for ny, nx in self.neighbors(coord) if self.field[ny][nx].state == TileState.FLAGGED)

    def _chord(self, coord: Coordinate) -> None:
        tile = self.field[coord[0]][coord[1]]
        if tile.number <= 0 or self.flagged_around(coord) != tile.number:
            return
        for ny, nx in self.neighbors(coord):
            if self.field[ny][nx].state == TileState.HIDDEN:
                self._flood((ny, nx))

    def reveal(self, coord: Coordinate) -> None:
        if self.is_over:
            return
        tile = self.tile(coord)
        if tile is None or tile.state == TileState.FLAGGED:
            return
        if self._revealed == 0:
            self._place_mines(coord)

        if tile.state == TileState.VISIBLE:
            self._chord(coord)
        else:
            self._flood(coord)

        # A loss wins over the revealed-count check
        if self._phase == GamePhase.LOST:
            self._end_game()
        elif self._mines + self._revealed == self.width * self.height:
            self._phase = GamePhase.WON
            logger.debug('all %d safe tiles revealed', self._revealed)
            self._end_game()

    def _end_game(self) -> None:
        logger.info('game %s after %d revealed tiles', self._phase.name.lower(), self._revealed)
        self.on_game_end(self._phase)

    def toggle_flag(self, coord: Coordinate) -> None:
        if self.is_over:
            return
        tile = self.tile(coord)
        if tile is None:
            return
        tile.state = _next_flag_state(tile.state)
        if tile.state == TileState.FLAGGED:
            self._flags += 1
        elif tile.state == TileState.HIDDEN:
            self._flags -= 1
        self.on_tile_changed(tile, coord)
