"""Tooltip text and drawing for the control panel (brushes, materials)."""

import pygame
from typing import Optional

from world.constants import BrushSize, MaterialType
from world.materials import MaterialDefinition

TOOLTIP_BG = (28, 28, 32)
TOOLTIP_BORDER = (60, 60, 68)
TOOLTIP_TEXT = (240, 240, 235)
TOOLTIP_MINMAX = (150, 150, 148)
TOOLTIP_MAX_WIDTH = 220
TOOLTIP_PADDING = 6
TOOLTIP_OFFSET_Y = 8
TOOLTIP_DESC_MINMAX_GAP = 4

# (description, detail). Key = brush size.
BRUSH_TOOLTIPS = {
    BrushSize.SMALL: ("Paints the single cell under the pointer.", None),
    BrushSize.MEDIUM: (
        "Scatters paint inside a box reaching 8 cells from the pointer. "
        "A fifth of the box is painted per frame, denser near the center.",
        "Repeated points simply repaint the same cell.",
    ),
    BrushSize.BIG: (
        "Scatters paint inside a box reaching 16 cells from the pointer. "
        "A fifth of the box is painted per frame, denser near the center.",
        "Repeated points simply repaint the same cell.",
    ),
}

CATEGORY_TOOLTIPS = {
    MaterialType.NONE: "Eraser: paints empty cells.",
    MaterialType.SOLID: "Solid: falls down, else slides down-left or down-right.",
    MaterialType.LIQUID: "Liquid: falls like a solid, else flows left or right.",
    MaterialType.GAS: "Gas: drifts one cell in a random direction each tick.",
}


def material_tooltip(definition: MaterialDefinition) -> tuple[str, Optional[str]]:
    desc = CATEGORY_TOOLTIPS.get(definition.type, "")
    replaces = sorted(definition.spread_rules.can_replace)
    detail = f"Displaces: {', '.join(replaces)}" if replaces else None
    return desc, detail


def wrap_tooltip_text(text: str, font: pygame.font.Font, max_width: int) -> list[str]:
    words = text.split()
    lines = []
    current: list[str] = []
    for word in words:
        w, _ = font.size(" ".join(current + [word]))
        if current and w > max_width:
            lines.append(" ".join(current))
            current = [word]
        else:
            current.append(word)
    if current:
        lines.append(" ".join(current))
    return lines


def draw_tooltip(
    surface: pygame.Surface,
    font: pygame.font.Font,
    small_font: pygame.font.Font,
    tooltip_raw: Optional[tuple[str, Optional[str]] | str],
    mouse_pos: tuple[int, int],
) -> None:
    if not tooltip_raw:
        return
    desc = tooltip_raw[0] if isinstance(tooltip_raw, tuple) else tooltip_raw
    detail = tooltip_raw[1] if isinstance(tooltip_raw, tuple) and len(tooltip_raw) > 1 else None
    if not desc:
        return
    mx, my = mouse_pos
    lines_desc = wrap_tooltip_text(desc, font, TOOLTIP_MAX_WIDTH)
    line_h_desc = font.get_height()
    box_w = max((font.size(l)[0] for l in lines_desc), default=0) + 2 * TOOLTIP_PADDING
    box_h = len(lines_desc) * line_h_desc + 2 * TOOLTIP_PADDING
    lines_detail: list[str] = []
    if detail:
        lines_detail = wrap_tooltip_text(detail, small_font, TOOLTIP_MAX_WIDTH)
        box_h += TOOLTIP_DESC_MINMAX_GAP + len(lines_detail) * small_font.get_height()
        box_w = max(box_w, max((small_font.size(l)[0] for l in lines_detail), default=0) + 2 * TOOLTIP_PADDING)
    box_w = min(box_w, TOOLTIP_MAX_WIDTH + 2 * TOOLTIP_PADDING)
    sw, sh = surface.get_size()
    tx = mx + 12 if mx + 12 + box_w <= sw else mx - box_w - 12
    ty = my + TOOLTIP_OFFSET_Y if my + TOOLTIP_OFFSET_Y + box_h <= sh else my - box_h - TOOLTIP_OFFSET_Y
    tx = max(0, min(tx, sw - box_w))
    ty = max(0, min(ty, sh - box_h))
    tooltip_rect = pygame.Rect(tx, ty, box_w, box_h)
    pygame.draw.rect(surface, TOOLTIP_BG, tooltip_rect)
    pygame.draw.rect(surface, TOOLTIP_BORDER, tooltip_rect, 1)
    y_off = ty + TOOLTIP_PADDING
    for line in lines_desc:
        surface.blit(font.render(line, True, TOOLTIP_TEXT), (tx + TOOLTIP_PADDING, y_off))
        y_off += line_h_desc
    if lines_detail:
        y_off += TOOLTIP_DESC_MINMAX_GAP
        for line in lines_detail:
            surface.blit(small_font.render(line, True, TOOLTIP_MINMAX), (tx + TOOLTIP_PADDING, y_off))
            y_off += small_font.get_height()
