from __future__ import annotations
import numpy as np

from .engine import GameManager, Tile, TileState, MINE

# Read-only projections of a game's board, for adapters and for checking
# the counting invariants. Arrays are indexed [row, col].


def tile_text(tile: Tile) -> str:
    if tile.state == TileState.FLAGGED:
        return 'f'
    if tile.state == TileState.HIDDEN:
        return ''
    if tile.number == MINE:
        return 'b'
    if tile.number == 0:
        return ''
    return str(tile.number)


def _ascii_char(tile: Tile, reveal_all: bool) -> str:
    if tile.state == TileState.FLAGGED and not reveal_all:
        return 'F'
    if tile.state == TileState.HIDDEN and not reveal_all:
        return '#'
    if tile.number == MINE:
        return '*'
    if tile.number == 0:
        return '.'
    return str(tile.number)


def render_ascii(game: GameManager, reveal_all: bool = False) -> str:
    rows = []
    for row in game.field:
        rows.append(' '.join(_ascii_char(tile, reveal_all) for tile in row))
    return '\n'.join(rows)


def number_grid(game: GameManager) -> np.ndarray:
    return np.array([[tile.number for tile in row] for row in game.field], dtype=int).reshape(game.height, game.width)


def state_grid(game: GameManager) -> np.ndarray:
    return np.array([[int(tile.state) for tile in row] for row in game.field], dtype=int).reshape(game.height, game.width)


def mine_mask(game: GameManager) -> np.ndarray:
    return number_grid(game) == MINE


def adjacent_mine_counts(mask: np.ndarray) -> np.ndarray:
    """Count mines in the 8-neighborhood of every cell of a boolean mask."""
    mask = np.asarray(mask, dtype=int)
    h, w = mask.shape
    padded = np.pad(mask, 1)
    counts = np.zeros((h, w), dtype=int)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dy == 0 and dx == 0:
                continue
            counts += padded[1 + dy:1 + dy + h, 1 + dx:1 + dx + w]
    return counts

