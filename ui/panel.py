"""Right panel: brush and material dropdowns, tick-rate slider, play/pause, single step, clear."""

import pygame
from typing import Callable

from ui import tooltips
from world.brush import BrushState
from world.constants import BrushSize
from world.materials import MaterialCatalog

FONT_SIZE = 16
TOOLTIP_FONT_SIZE = 19
TOOLTIP_SMALL_FONT_SIZE = 16
LABEL_COLOR = (200, 200, 200)
SLIDER_COLOR = (100, 100, 100)
KNOB_COLOR = (180, 180, 180)
BUTTON_COLOR = (60, 60, 60)
BUTTON_HOVER = (80, 80, 80)
PANEL_BG = (24, 24, 24)

BRUSH_LABELS = {
    BrushSize.SMALL: "Small (1 cell)",
    BrushSize.MEDIUM: "Medium (extent = 8)",
    BrushSize.BIG: "Big (extent = 16)",
}
BRUSH_ORDER = (BrushSize.SMALL, BrushSize.MEDIUM, BrushSize.BIG)


class ControlPanel:
    """State: params dict plus the BrushState handed to paint(). Step and Clear callbacks."""

    def __init__(
        self,
        rect: pygame.Rect,
        catalog: MaterialCatalog,
        initial: dict,
        on_step: Callable[[], None],
        on_clear: Callable[[], None],
    ) -> None:
        self.rect = rect
        self.catalog = catalog
        material = initial.get("material")
        if material not in catalog:
            material = catalog.names()[0]
        self.brush_state = BrushState(BrushSize(initial.get("brush", BrushSize.SMALL)), material)
        self.params = {
            "tick_rate": initial.get("tick_rate", 60),
            "paused": False,
        }
        self.on_step = on_step
        self.on_clear = on_clear
        self._font = None
        self._slider_rects: dict = {}
        self._button_rects: dict = {}
        self._dragging: str | None = None
        self._brush_dropdown_expanded = False
        self._brush_option_rects: list[tuple[BrushSize, pygame.Rect]] = []
        self._material_dropdown_expanded = False
        self._material_option_rects: list[tuple[str, pygame.Rect]] = []
        self._tooltip_rects: dict[str, tuple[pygame.Rect, tuple]] = {}
        self._hover_tooltip_text = None
        self._tooltip_font = None
        self._tooltip_small_font = None

    def _ensure_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def _ensure_tooltip_fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._tooltip_font is None:
            self._tooltip_font = pygame.font.Font(None, TOOLTIP_FONT_SIZE)
            self._tooltip_small_font = pygame.font.Font(None, TOOLTIP_SMALL_FONT_SIZE)
        return self._tooltip_font, self._tooltip_small_font

    def get_params(self) -> dict:
        return self.params.copy()

    def draw(self, surface: pygame.Surface, tick_count: int = 0, particle_count: int = 0, seed: int | None = None) -> None:
        font = self._ensure_font()
        pygame.draw.rect(surface, PANEL_BG, self.rect)
        x, y = self.rect.x + 8, self.rect.y + 6
        line_h = 18
        gap = 4
        self._slider_rects.clear()
        self._button_rects.clear()
        self._tooltip_rects.clear()
        mouse = pygame.mouse.get_pos()

        slider_w = self.rect.width - 16 - 44
        slider_h = 12

        surface.blit(font.render(f"Tick: {tick_count}", True, LABEL_COLOR), (x, y))
        y += line_h
        surface.blit(font.render(f"Particles: {particle_count}", True, LABEL_COLOR), (x, y))
        y += line_h
        if seed is not None:
            surface.blit(font.render(f"Seed: {seed}", True, LABEL_COLOR), (x, y))
            y += line_h
        y += gap

        drop_w, drop_h = self.rect.width - 16, 18

        # Brush dropdown
        surface.blit(font.render("Brush", True, LABEL_COLOR), (x, y))
        y += line_h
        self._brush_dropdown_rect = _draw_dropdown(
            surface, font, x, y, drop_w, drop_h, BRUSH_LABELS[self.brush_state.brush]
        )
        y += drop_h + gap
        self._brush_option_rects.clear()
        if self._brush_dropdown_expanded:
            for brush in BRUSH_ORDER:
                opt_rect = _draw_option(surface, font, x, y, drop_w, drop_h, BRUSH_LABELS[brush], mouse)
                self._brush_option_rects.append((brush, opt_rect))
                self._tooltip_rects[f"brush_{int(brush)}"] = (opt_rect, tooltips.BRUSH_TOOLTIPS[brush])
                y += drop_h + 1
        y += gap

        # Material dropdown with color swatch
        surface.blit(font.render("Material", True, LABEL_COLOR), (x, y))
        y += line_h
        self._material_dropdown_rect = _draw_dropdown(
            surface, font, x, y, drop_w, drop_h, self.brush_state.material,
            swatch=self.catalog.lookup(self.brush_state.material).initial_color,
        )
        y += drop_h + gap
        self._material_option_rects.clear()
        if self._material_dropdown_expanded:
            for name in self.catalog.names():
                definition = self.catalog.lookup(name)
                opt_rect = _draw_option(
                    surface, font, x, y, drop_w, drop_h, name, mouse, swatch=definition.initial_color
                )
                self._material_option_rects.append((name, opt_rect))
                self._tooltip_rects[f"material_{name}"] = (opt_rect, tooltips.material_tooltip(definition))
                y += drop_h + 1
        y += gap

        # Tick rate 1–120
        surface.blit(font.render("Tick rate (1–120)", True, LABEL_COLOR), (x, y))
        y += line_h
        sr = _draw_slider(surface, x, y, slider_w, slider_h, self.params["tick_rate"], 1, 120)
        _draw_slider_value(surface, font, x + slider_w + 4, y, str(self.params["tick_rate"]))
        self._slider_rects["tick_rate"] = (sr, 1, 120)
        y += slider_h + gap * 2

        # Pause / Step / Clear
        btn_h = 26
        pause_rect = _draw_button(surface, font, x, y, 70, btn_h, "Resume" if self.params["paused"] else "Pause", mouse)
        self._button_rects["pause"] = pause_rect
        self._button_rects["step"] = _draw_button(surface, font, x + 74, y, 60, btn_h, "Step", mouse)
        self._button_rects["clear"] = _draw_button(surface, font, x + 138, y, 60, btn_h, "Clear", mouse)

    def update_hover_tooltip(self, pos: tuple[int, int]) -> None:
        self._hover_tooltip_text = None
        for r, text in self._tooltip_rects.values():
            if r.collidepoint(pos):
                self._hover_tooltip_text = text
                return

    def draw_tooltip(self, surface: pygame.Surface) -> None:
        tf, sf = self._ensure_tooltip_fonts()
        tooltips.draw_tooltip(surface, tf, sf, self._hover_tooltip_text, pygame.mouse.get_pos())

    def wants_pointer(self, pos: tuple[int, int]) -> bool:
        """True while the pointer is over the panel or an open dropdown; the grid should not paint then."""
        if self.rect.collidepoint(pos):
            return True
        options = self._brush_option_rects + self._material_option_rects
        return any(r.collidepoint(pos) for _, r in options)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if event was consumed."""
        if event.type == pygame.MOUSEBUTTONDOWN:
            if getattr(self, "_brush_dropdown_rect", None) and self._brush_dropdown_rect.collidepoint(event.pos):
                self._brush_dropdown_expanded = not self._brush_dropdown_expanded
                self._material_dropdown_expanded = False
                return True
            for brush, opt_rect in self._brush_option_rects:
                if opt_rect.collidepoint(event.pos):
                    self.brush_state.brush = brush
                    self._brush_dropdown_expanded = False
                    return True
            if getattr(self, "_material_dropdown_rect", None) and self._material_dropdown_rect.collidepoint(event.pos):
                self._material_dropdown_expanded = not self._material_dropdown_expanded
                self._brush_dropdown_expanded = False
                return True
            for name, opt_rect in self._material_option_rects:
                if opt_rect.collidepoint(event.pos):
                    self.brush_state.material = name
                    self._material_dropdown_expanded = False
                    return True
            self._brush_dropdown_expanded = False
            self._material_dropdown_expanded = False
            if self._button_rects.get("pause") and self._button_rects["pause"].collidepoint(event.pos):
                self.params["paused"] = not self.params["paused"]
                return True
            if self._button_rects.get("step") and self._button_rects["step"].collidepoint(event.pos):
                self.on_step()
                return True
            if self._button_rects.get("clear") and self._button_rects["clear"].collidepoint(event.pos):
                self.on_clear()
                return True
            for key, (sr, lo, hi) in self._slider_rects.items():
                if sr.collidepoint(event.pos):
                    self._dragging = key
                    self._set_slider_value(key, event.pos, sr, lo, hi)
                    return True
            return self.rect.collidepoint(event.pos)
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self.params["paused"] = not self.params["paused"]
                return True
            if event.key == pygame.K_PERIOD:
                self.on_step()
                return True
            if event.key in (pygame.K_1, pygame.K_2, pygame.K_3):
                self.brush_state.brush = BRUSH_ORDER[event.key - pygame.K_1]
                return True
        elif event.type == pygame.MOUSEBUTTONUP:
            self._dragging = None
        elif event.type == pygame.MOUSEMOTION:
            self.update_hover_tooltip(event.pos)
            if self._dragging is not None:
                sr, lo, hi = self._slider_rects[self._dragging]
                self._set_slider_value(self._dragging, event.pos, sr, lo, hi)
                return True
        return False

    def _set_slider_value(self, key: str, pos: tuple[int, int], slider_rect: pygame.Rect, lo: int, hi: int) -> None:
        t = (pos[0] - slider_rect.x) / max(1, slider_rect.width - 8)
        t = max(0, min(1, t))
        self.params[key] = int(lo + t * (hi - lo))

    def settings(self) -> dict:
        """Panel-owned values worth saving between runs."""
        return {
            "tick_rate": self.params["tick_rate"],
            "brush": int(self.brush_state.brush),
            "material": self.brush_state.material,
        }


def _draw_dropdown(
    surface: pygame.Surface, font: pygame.font.Font, x: int, y: int, w: int, h: int, text: str, swatch=None
) -> pygame.Rect:
    rect = pygame.Rect(x, y, w, h)
    pygame.draw.rect(surface, SLIDER_COLOR, rect)
    pygame.draw.polygon(surface, LABEL_COLOR, [(x + w - 12, y + 4), (x + w - 6, y + 4), (x + w - 9, y + 11)])
    _draw_label(surface, font, rect, text, swatch)
    return rect


def _draw_option(
    surface: pygame.Surface, font: pygame.font.Font, x: int, y: int, w: int, h: int, text: str, mouse, swatch=None
) -> pygame.Rect:
    rect = pygame.Rect(x, y, w, h)
    pygame.draw.rect(surface, BUTTON_HOVER if rect.collidepoint(mouse) else BUTTON_COLOR, rect)
    _draw_label(surface, font, rect, text, swatch)
    return rect


def _draw_label(surface: pygame.Surface, font: pygame.font.Font, rect: pygame.Rect, text: str, swatch) -> None:
    tx = rect.x + 4
    if swatch is not None:
        box = pygame.Rect(tx, rect.y + 3, rect.height - 6, rect.height - 6)
        pygame.draw.rect(surface, swatch, box)
        pygame.draw.rect(surface, LABEL_COLOR, box, 1)
        tx = box.right + 4
    surface.blit(font.render(text, True, LABEL_COLOR), (tx, rect.y + 2))


def _draw_button(
    surface: pygame.Surface, font: pygame.font.Font, x: int, y: int, w: int, h: int, text: str, mouse
) -> pygame.Rect:
    rect = pygame.Rect(x, y, w, h)
    pygame.draw.rect(surface, BUTTON_HOVER if rect.collidepoint(mouse) else BUTTON_COLOR, rect)
    surface.blit(font.render(text, True, LABEL_COLOR), (rect.x + 6, rect.y + 4))
    return rect


def _draw_slider(
    surface: pygame.Surface, x: int, y: int, w: int, h: int, value: int, vmin: int, vmax: int
) -> pygame.Rect:
    rect = pygame.Rect(x, y, w, h)
    pygame.draw.rect(surface, SLIDER_COLOR, rect)
    t = (value - vmin) / max(1, vmax - vmin)
    knob_x = x + 4 + int(t * (w - 8))
    pygame.draw.rect(surface, KNOB_COLOR, (knob_x, y, 8, h))
    return rect


def _draw_slider_value(
    surface: pygame.Surface, font: pygame.font.Font, x: int, y: int, value_str: str
) -> None:
    text = font.render(value_str, True, LABEL_COLOR)
    surface.blit(text, (x, y))
