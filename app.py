"""
App shell: display and main loop. Each frame: paint from pointer input, then run the
ticks due at tick_rate (whole-grid scans, never overlapping), then draw. World, UI and
config are wired here.
"""

import logging

import pygame

import config
from ui.colors import occupancy
from ui.grid_view import draw_brush_outline, draw_grid
from ui.panel import ControlPanel
from world import Grid, UnknownMaterialError, load_catalog, paint, step
from world.seed_util import make_rng

logger = logging.getLogger(__name__)

TITLE = "Falling Sand"
PANEL_WIDTH = 240
BACKGROUND = (0, 0, 0)


def run() -> None:
    cfg = config.load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, str(cfg.get("log_level", "INFO")).upper(), logging.INFO),
    )
    catalog = load_catalog(config.material_path(cfg))
    rng, seed_used = make_rng(cfg.get("seed", -1))
    logger.info("Random seed %d", seed_used)

    cell_size = max(1, int(cfg["cell_size"]))
    grid = Grid.from_surface(cfg["window"]["width"], cfg["window"]["height"], cell_size)
    grid_w, grid_h = grid.shape
    grid_px_w, grid_px_h = grid_w * cell_size, grid_h * cell_size
    logger.info("Grid %dx%d cells at %dpx", grid_w, grid_h, cell_size)

    pygame.init()
    screen = pygame.display.set_mode((grid_px_w + PANEL_WIDTH, grid_px_h))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()

    total_ticks = 0
    allow_double = bool(cfg.get("allow_double_update", False))

    def do_step() -> None:
        nonlocal total_ticks
        step(grid, rng, allow_double_update=allow_double)
        total_ticks += 1

    def do_clear() -> None:
        nonlocal total_ticks
        grid.clear()
        total_ticks = 0

    panel = ControlPanel(
        pygame.Rect(grid_px_w, 0, PANEL_WIDTH, grid_px_h),
        catalog,
        {
            "tick_rate": cfg.get("tick_rate", 60),
            "brush": cfg.get("brush", 1),
            "material": cfg.get("material"),
        },
        on_step=do_step,
        on_clear=do_clear,
    )

    grid_rect = pygame.Rect(0, 0, grid_px_w, grid_px_h)
    mouse_down = False
    last_missing: str | None = None
    tick_accum = 0.0
    running = True

    while running:
        dt_ms = clock.tick(60)
        dt_s = dt_ms / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if panel.handle_event(event):
                continue
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                mouse_down = True
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                mouse_down = False

        pos = pygame.mouse.get_pos()
        if mouse_down and grid_rect.collidepoint(pos) and not panel.wants_pointer(pos):
            try:
                paint(grid, catalog, panel.brush_state, pos, cell_size, rng)
                last_missing = None
            except UnknownMaterialError as exc:
                if exc.name != last_missing:
                    logger.warning("Paint refused: %s", exc)
                last_missing = exc.name

        params = panel.get_params()
        if not params["paused"]:
            tick_rate = max(1, min(120, params["tick_rate"]))
            tick_accum += dt_s * tick_rate
            # Cap ticks per frame so we never freeze when tick rate exceeds what we can do
            max_ticks_per_frame = max(2, tick_rate // 30)
            num_ticks = min(int(tick_accum), max_ticks_per_frame)
            tick_accum -= num_ticks
            tick_accum = min(tick_accum, max_ticks_per_frame)
            for _ in range(num_ticks):
                do_step()

        screen.fill(BACKGROUND)
        draw_grid(screen, grid, cell_size)
        if grid_rect.collidepoint(pos) and not panel.wants_pointer(pos):
            draw_brush_outline(screen, grid, cell_size, pos, panel.brush_state.brush)
        panel.draw(screen, tick_count=total_ticks, particle_count=int(occupancy(grid).sum()), seed=seed_used)
        panel.draw_tooltip(screen)
        pygame.display.flip()

    config.save_config({**cfg, **panel.settings()})
    pygame.quit()


if __name__ == "__main__":
    run()
