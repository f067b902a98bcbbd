from __future__ import annotations
import tkinter as tk
from tkinter import ttk, messagebox

from minefield.engine import GameManager, GamePhase, Tile, TileState, Coordinate
from minefield.settings import GameSettings, SettingsError, parse_settings
from minefield.views import tile_text


CELL_SIZE = 28
PADDING = 10
COLOR_MAP = {
    1: '#1976d2',
    2: '#388e3c',
    3: '#d32f2f',
    4: '#7b1fa2',
    5: '#5d4037',
    6: '#0097a7',
    7: '#455a64',
    8: '#9e9e9e',
}


def cell_at(px: int, py: int) -> Coordinate:
    return ((py - PADDING) // CELL_SIZE, (px - PADDING) // CELL_SIZE)


class MinesweeperGUI:
    def __init__(self, root: tk.Tk, settings: GameSettings = GameSettings()):
        self.root = root
        self.root.title('Minefield')

        # Settings form
        control_frame = ttk.Frame(root)
        control_frame.pack(side=tk.TOP, fill=tk.X, padx=8, pady=6)

        ttk.Label(control_frame, text='Width').grid(row=0, column=0, sticky='w')
        self.width_var = tk.StringVar(value=str(settings.width))
        ttk.Entry(control_frame, textvariable=self.width_var, width=4).grid(row=0, column=1)

        ttk.Label(control_frame, text='Height').grid(row=0, column=2, sticky='w')
        self.height_var = tk.StringVar(value=str(settings.height))
        ttk.Entry(control_frame, textvariable=self.height_var, width=4).grid(row=0, column=3)

        ttk.Label(control_frame, text='Mines').grid(row=0, column=4, sticky='w')
        self.mines_var = tk.StringVar(value=str(settings.mines))
        ttk.Entry(control_frame, textvariable=self.mines_var, width=5).grid(row=0, column=5)

        self.btn_new = ttk.Button(control_frame, text='New game', command=self.new_game)
        self.btn_new.grid(row=0, column=6, padx=4)

        # Status
        stats_frame = ttk.Frame(root)
        stats_frame.pack(side=tk.TOP, fill=tk.X, padx=8, pady=2)
        self.label_status = ttk.Label(stats_frame, text='')
        self.label_status.pack(side=tk.LEFT)

        # Canvas for board
        self.canvas = tk.Canvas(root, bg='#eeeeee')
        self.canvas.pack(side=tk.TOP, padx=PADDING, pady=PADDING)
        self.canvas.bind('<Button-1>', self.on_left_click)
        self.canvas.bind('<Button-3>', self.on_right_click)

        self.game = GameManager(self.draw_tile, self.on_game_end)
        self._start(settings)

    def new_game(self):
        try:
            settings = parse_settings(self.width_var.get(), self.height_var.get(), self.mines_var.get())
        except SettingsError as e:
            messagebox.showerror('Invalid settings', str(e))
            return
        self._start(settings)

    def _start(self, settings: GameSettings):
        w = settings.width * CELL_SIZE + PADDING * 2
        h = settings.height * CELL_SIZE + PADDING * 2
        self.canvas.config(width=w, height=h)
        self.canvas.delete('all')
        self.game.reset(settings.width, settings.height, settings.mines)
        self._update_status()

    def draw_tile(self, tile: Tile, coord: Coordinate):
        y, x = coord
        px = PADDING + x * CELL_SIZE
        py = PADDING + y * CELL_SIZE
        if tile.state == TileState.FLAGGED:
            fill, outline = '#ffc107', '#999'
        elif tile.state == TileState.HIDDEN:
            fill, outline = '#bdbdbd', '#9e9e9e'
        elif tile.is_mine:
            fill, outline = '#ef5350', '#999'
        else:
            fill, outline = '#eeeeee', '#ccc'
        tag = f'cell-{y}-{x}'
        self.canvas.delete(tag)
        self.canvas.create_rectangle(px, py, px+CELL_SIZE, py+CELL_SIZE, fill=fill, outline=outline, tags=tag)
        text = tile_text(tile)
        if text:
            color = COLOR_MAP.get(tile.number, '#212121')
            self.canvas.create_text(px+CELL_SIZE/2, py+CELL_SIZE/2, text=text, fill=color,
                                    font=('Helvetica', 12, 'bold'), tags=tag)

    def _update_status(self):
        self.label_status.config(text=f'Mines left: {self.game.remaining_mines}')

    def on_left_click(self, event):
        self.game.reveal(cell_at(event.x, event.y))
        self._update_status()

    def on_right_click(self, event):
        self.game.toggle_flag(cell_at(event.x, event.y))
        self._update_status()

    def on_game_end(self, phase: GamePhase):
        messagebox.showinfo('Minefield', 'game won' if phase == GamePhase.WON else 'game lost')


def main():
    root = tk.Tk()
    app = MinesweeperGUI(root)
    root.mainloop()


if __name__ == '__main__':
    main()
