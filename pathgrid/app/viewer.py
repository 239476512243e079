# pathgrid/app/viewer.py
#!/usr/bin/env python3
"""
Pathgrid Viewer: edit a grid, run a search step by step, watch it fill in.

- Keyboard:
    [B]/[D]/[J]/[A] -> select algorithm (BFS / DFS / Dijkstra / A*)
    [SPACE]         -> run/pause
    [N]             -> single step
    [R]             -> reset overlays (keeps walls/weights)
    [C]             -> clear grid
    [M]             -> generate maze
    [F5]/[F9]       -> save / load the active configuration slot
    [F8]            -> switch to the next saved slot
    [+]/[-]         -> steps/sec
    [Q]/[ESC]       -> quit

- Mouse:
    left click/drag        -> toggle walls, or drag start/end
    right click            -> cycle weight 1..9
    shift + left / right   -> place start / end

Settings (env, overridden by --key=value):
- PATHGRID_ALGO / --algo=bfs|dfs|dijkstra|astar
- PATHGRID_SIZE / --size=RxC
- PATHGRID_CONFIGS / --configs=path.json
- PATHGRID_SLOT / --slot=name  (configuration name used by save/load)
- PATHGRID_LOG  (logging level)
"""

import sys, os, time
import logging
from typing import List, Tuple, Optional, Dict

import pygame

from pathgrid.core.types import Cell, CellState, InvalidInput
from pathgrid.core.grid import Grid, MAX_WEIGHT
from pathgrid.core.base import SearchAlgo
from pathgrid.core.engine import ALGORITHMS, make_algo
from pathgrid.core.maze import generate_maze
from pathgrid.core.snapshot import to_snapshot, from_snapshot, load_configs, save_configs

logger = logging.getLogger(__name__)


# ---------- Settings resolution ----------
def resolve_setting(key: str, env: str, default: str) -> str:
    value = os.getenv(env, default)
    for arg in sys.argv[1:]:
        if arg.startswith(f"--{key}="):
            value = arg.split("=", 1)[1]
    return value


def next_slot(names, current: str) -> str:
    """Saved name that follows current, wrapping around; current if nothing is saved."""
    names = sorted(names)
    if not names:
        return current
    if current not in names:
        return names[0]
    return names[(names.index(current) + 1) % len(names)]


def parse_size(text: str) -> Tuple[int, int]:
    try:
        rows, cols = (int(x) for x in text.lower().split("x", 1))
    except ValueError:
        raise InvalidInput(f"size must look like 20x20, got {text!r}") from None
    return rows, cols


ALGO_LABELS = {"bfs": "BFS", "dfs": "DFS", "dijkstra": "Dijkstra", "astar": "A*"}
DEFAULT_SLOT = "default"

# ---------- Config ----------
PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
MIN_CELL = 8
MAX_CELL = 32
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
FLOOR_GRAY  = (200,200,200)
WALL_DARK   = ( 40, 44, 52)
WEIGHT_TAN  = (222,184,135)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


def default_grid(rows: int, cols: int) -> Grid:
    grid = Grid(rows, cols)
    if cols > 1:
        grid.set_start((rows // 2, cols // 5))
        grid.set_end((rows // 2, cols - 1 - cols // 5))
    elif rows > 1:
        grid.set_start((0, 0))
        grid.set_end((rows - 1, 0))
    return grid


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, algo_key: str = "dijkstra", configs_path: str = "pathgrid_configs.json",
                 slot: str = DEFAULT_SLOT):
        pygame.init()

        self.grid = grid
        self.slot = slot
        self.configs_path = configs_path
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        win_w = GRID_MARGIN*2 + grid.cols * 24 + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.rows * 24, 600)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathgrid")

        self._buttons: list[UIButton] = []

        self.open_set: set[Cell] = set()
        self.closed_set: set[Cell] = set()
        self.path: List[Cell] = []

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = 20
        self.state = "Idle"
        self.selected_algo = algo_key
        self.algo: Optional[SearchAlgo] = None
        self._last_metrics: Dict = {}
        self._last_step_t = 0.0
        self._started_t: Optional[float] = None
        self._elapsed_ms = 0

        # mouse gesture state
        self._drag_endpoint: Optional[str] = None
        self._paint_walls: Optional[bool] = None

        self._layout(win_w, win_h)
        self._rebuild_algo()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(MIN_CELL, min(MAX_CELL, avail_w // self.grid.cols, avail_h // self.grid.rows)))

        grid_plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        c = (row, col)
        return c if self.grid.in_bounds(c) else None

    # ---------- algorithm lifecycle ----------
    def _rebuild_algo(self):
        self._reset_overlays()
        self.running = False
        try:
            self.algo = make_algo(self.selected_algo)
            self.algo.init(self.grid)
            self.state = "Idle"
        except InvalidInput as ex:
            self.algo = None
            self.state = "Set start & end"
            logger.debug("search not ready: %s", ex)
        self._refresh_active_states()

    def _search_in_progress(self) -> bool:
        return self.state in ("Running", "Paused")

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        if self.algo is None or self.state in ("Done", "No path"):
            return
        if self._started_t is None:
            self._started_t = time.time()
        res = self.algo.step()
        for c in res.opened: self.open_set.add(c)
        for c in res.closed:
            self.closed_set.add(c)
            self.open_set.discard(c)
        if res.path is not None: self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
            print("No path found!")
        elif res.status == "running":
            self.state = "Running" if self.running else "Paused"
        self._elapsed_ms = int((time.time() - self._started_t) * 1000)
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    def _reset_overlays(self):
        self.open_set.clear()
        self.closed_set.clear()
        self.path = []
        self._started_t = None
        self._elapsed_ms = 0
        self._last_metrics = {
            "algo": ALGO_LABELS.get(self.selected_algo, self.selected_algo),
            "popped": 0, "open_size": 0, "closed_count": 0, "path_len": 0, "total_cost": None,
        }

    def _reset(self):
        self.running = False
        if self.algo is not None:
            self.algo.reset()
            self.state = "Idle"
        self._reset_overlays()
        self._refresh_active_states()

    # ---------- grid editing ----------
    def _edit(self, fn, *args) -> bool:
        """Apply one grid edit, unless a search is mid-flight."""
        if self._search_in_progress():
            return False
        try:
            fn(*args)
        except InvalidInput as ex:
            logger.debug("edit rejected: %s", ex)
            return False
        self._rebuild_algo()
        return True

    def _cycle_weight(self, c: Cell):
        state = self.grid.state_of(c)
        if state in (CellState.START, CellState.END):
            return
        w = self.grid.weights.get(c, 1)
        self._edit(self.grid.set_weight, c, w + 1 if w < MAX_WEIGHT else 1)

    def _clear_grid(self):
        self._edit(self.grid.reset)

    def _generate_maze(self):
        if self._search_in_progress():
            return
        generate_maze(self.grid)
        self._rebuild_algo()

    def _save(self):
        try:
            configs = load_configs(self.configs_path)
            configs[self.slot] = to_snapshot(self.grid)
            save_configs(self.configs_path, configs)
            print(f"Saved configuration '{self.slot}' to {self.configs_path}")
        except (OSError, ValueError) as ex:
            print(f"Failed to save configuration: {ex}")

    def _load(self):
        if self._search_in_progress():
            return
        try:
            configs = load_configs(self.configs_path)
            if self.slot not in configs:
                print(f"Configuration '{self.slot}' not found!")
                return
            self.grid = from_snapshot(configs[self.slot])
        except (OSError, ValueError) as ex:
            print(f"Failed to load configuration: {ex}")
            return
        self._layout(*self.screen.get_size())
        self._rebuild_algo()

    def _cycle_slot(self):
        try:
            configs = load_configs(self.configs_path)
        except (OSError, ValueError) as ex:
            print(f"Failed to read configurations: {ex}")
            return
        self.slot = next_slot(configs, self.slot)
        print(f"Active configuration slot: '{self.slot}'")

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(480, e.w), max(360, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                self._handle_grid_mouse(e)

    def _handle_key(self, e: pygame.event.Event):
        if e.key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif e.key == pygame.K_SPACE:
            self._toggle_run()
        elif e.key == pygame.K_n:
            self._do_step()
        elif e.key == pygame.K_r:
            self._reset()
        elif e.key == pygame.K_c:
            self._clear_grid()
        elif e.key == pygame.K_m:
            self._generate_maze()
        elif e.key == pygame.K_F5:
            self._save()
        elif e.key == pygame.K_F9:
            self._load()
        elif e.key == pygame.K_F8:
            self._cycle_slot()
        elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+1)
        elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-1)
        elif e.key == pygame.K_b:
            self._switch_algo("bfs")
        elif e.key == pygame.K_d:
            self._switch_algo("dfs")
        elif e.key == pygame.K_j:
            self._switch_algo("dijkstra")
        elif e.key == pygame.K_a:
            self._switch_algo("astar")

    def _handle_grid_mouse(self, e: pygame.event.Event):
        if e.type == pygame.MOUSEBUTTONUP:
            self._drag_endpoint = None
            self._paint_walls = None
            return

        c = self._cell_at(e.pos)
        if c is None:
            return
        shift = bool(pygame.key.get_mods() & pygame.KMOD_SHIFT)

        if e.type == pygame.MOUSEBUTTONDOWN:
            if e.button == 1 and shift:
                self._edit(self.grid.set_start, c)
            elif e.button == 3 and shift:
                self._edit(self.grid.set_end, c)
            elif e.button == 1:
                state = self.grid.state_of(c)
                if state == CellState.START:
                    self._drag_endpoint = "start"
                elif state == CellState.END:
                    self._drag_endpoint = "end"
                elif self._edit(self.grid.toggle_wall, c):
                    self._paint_walls = self.grid.is_block(c)
            elif e.button == 3:
                self._cycle_weight(c)

        elif e.type == pygame.MOUSEMOTION and e.buttons[0]:
            if self._drag_endpoint is not None:
                if c != getattr(self.grid, self._drag_endpoint):
                    self._edit(self.grid.move_endpoint, self._drag_endpoint, c)
            elif self._paint_walls is not None and self.grid.is_block(c) != self._paint_walls:
                if self.grid.state_of(c) not in (CellState.START, CellState.END):
                    self._edit(self.grid.set_blocked, c, self._paint_walls)

    def _switch_algo(self, key: str):
        if self.running:
            return
        self.selected_algo = key
        self._rebuild_algo()

    def _toggle_run(self):
        if self.algo is None or self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(120, self.steps_per_sec + dv * 5)))

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = tuple(int(top[i] + (bot[i]-top[i]) * t) for i in range(3))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _rect(self, c: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = c
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size
        for c in self.grid.cells():
            rect = self._rect(c)
            state = self.grid.state_of(c)
            if state == CellState.BLOCKED:
                pygame.draw.rect(self.screen, WALL_DARK, rect)
            elif state == CellState.WEIGHTED:
                pygame.draw.rect(self.screen, WEIGHT_TAN, rect)
                txt = self.font_small.render(str(self.grid.weights[c]), True, BLACK)
                self.screen.blit(txt, txt.get_rect(center=rect.center))
            else:
                pygame.draw.rect(self.screen, FLOOR_GRAY, rect)
            pygame.draw.rect(self.screen, BLACK, rect, 1)

        # overlays
        for layer, color in ((self.closed_set, NEON_MAG_A), (self.open_set, NEON_CYAN_A)):
            s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(color)
            for c in layer:
                if c not in (self.grid.start, self.grid.end):
                    self.screen.blit(s, self._rect(c).topleft)

        # path
        if self.path or self.state == "Done":
            pts = [self._rect(c).center for c in [self.grid.start] + self.path + [self.grid.end]]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, max(2, cs // 5))

        if self.grid.start is not None:
            self._draw_badge(self.grid.start, BLUE, "S")
        if self.grid.end is not None:
            self._draw_badge(self.grid.end, RED, "E")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        center = self._rect(cell).center
        pygame.draw.circle(self.screen, color, center, max(4, self.cell_size//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 274  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: str | None = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset); y += h + gap
        add("Clear Grid", self._clear_grid); y += h + gap
        add("Generate Maze", self._generate_maze); y += h + gap
        for key in ALGORITHMS:
            add(f"Algo: {ALGO_LABELS[key]}", lambda k=key: self._switch_algo(k),
                togglable=True, store_as=f"btn_algo_{key}")
            y += h + gap
        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        for key in ALGORITHMS:
            btn = getattr(self, f"btn_algo_{key}", None)
            if btn is not None:
                btn.set_active(self.selected_algo == key)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 254), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self._last_metrics
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Visited: {m.get('closed_count', 0)}")
        line(f"Open: {m.get('open_size', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost") is not None:
            line(f"Total Cost: {m['total_cost']}")
        line(f"Time: {self._elapsed_ms} ms")
        line("-" * 26)
        line(f"Algo: {ALGO_LABELS.get(self.selected_algo, self.selected_algo)}")
        line(f"State: {self.state}")
        line(f"Slot: {self.slot}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    logging.basicConfig(level=os.getenv("PATHGRID_LOG", "WARNING").upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    algo_key = resolve_setting("algo", "PATHGRID_ALGO", "dijkstra").lower()
    if algo_key not in ALGORITHMS:
        print(f"Unknown algorithm {algo_key!r}; pick one of {', '.join(ALGORITHMS)}")
        sys.exit(1)
    try:
        rows, cols = parse_size(resolve_setting("size", "PATHGRID_SIZE", "20x20"))
        grid = default_grid(rows, cols)
    except InvalidInput as ex:
        print(f"Bad grid size: {ex}")
        sys.exit(1)
    configs_path = resolve_setting("configs", "PATHGRID_CONFIGS", "pathgrid_configs.json")
    slot = resolve_setting("slot", "PATHGRID_SLOT", DEFAULT_SLOT)
    Viewer(grid, algo_key, configs_path, slot).run()

if __name__ == "__main__":
    main()
