"""
Side Panel Controls for the Texture Explorer

Dark-themed widgets drawn directly with pygame. The panel replaces the
right-click menu: one selector row per channel, one for texture presets,
and action buttons underneath.
"""

import pygame


# Theme colors
THEME = {
    "bg": (0, 0, 0),
    "panel": (25, 25, 35),
    "button": (40, 42, 55),
    "button_hover": (55, 58, 75),
    "button_active": (70, 100, 180),
    "text": (180, 185, 195),
    "text_bright": (230, 235, 245),
    "text_dim": (100, 105, 115),
    "divider": (40, 40, 55),
    "red": (200, 70, 70),
    "green": (70, 170, 90),
    "blue": (70, 110, 210),
}


class Button:
    """Clickable button with a centered label."""

    def __init__(self, x, y, width, height, label, on_click=None, active_color=None):
        self.rect = pygame.Rect(x, y, width, height)
        self.label = label
        self.on_click = on_click
        self.active_color = active_color or THEME["button_active"]
        self.active = False
        self.hovered = False

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.on_click:
                    self.on_click()
                return True
        elif event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        return False

    def draw(self, surface, font):
        if self.active:
            color = self.active_color
        elif self.hovered:
            color = THEME["button_hover"]
        else:
            color = THEME["button"]
        pygame.draw.rect(surface, color, self.rect, border_radius=4)

        label_surf = font.render(self.label, True, THEME["text_bright"])
        lx = self.rect.x + (self.rect.width - label_surf.get_width()) // 2
        ly = self.rect.y + (self.rect.height - label_surf.get_height()) // 2
        surface.blit(label_surf, (lx, ly))


class SelectorRow:
    """
    Grid of small buttons, one per formula index, at most one highlighted.

    `selected` is an index into `values`, or None when nothing in the row
    matches the current state (e.g. the texture row after picking a
    per-channel formula).
    """

    def __init__(self, x, y, width, values, labels, on_select=None,
                 active_color=None, btn_size=22, per_line=11):
        self.values = list(values)
        self.on_select = on_select
        self.selected = None
        self.buttons = []

        padding = 3
        bw = max(btn_size, (width - padding * (per_line - 1)) // per_line)
        for i, label in enumerate(labels):
            line, pos = divmod(i, per_line)
            bx = x + pos * (bw + padding)
            by = y + line * (btn_size + padding)
            self.buttons.append(Button(bx, by, bw, btn_size, label,
                                       active_color=active_color))
        lines = (len(labels) + per_line - 1) // per_line
        self.total_height = lines * (btn_size + padding) - padding

    def select_value(self, value):
        """Highlight the button for `value` (no callback)."""
        self.selected = self.values.index(value) if value in self.values else None
        for i, btn in enumerate(self.buttons):
            btn.active = (i == self.selected)

    def handle_event(self, event):
        for i, btn in enumerate(self.buttons):
            if btn.handle_event(event):
                if self.on_select:
                    self.on_select(self.values[i])
                return True
        return False

    def draw(self, surface, font):
        for btn in self.buttons:
            btn.draw(surface, font)


class SectionHeader:
    """Section divider with title."""

    def __init__(self, x, y, width, title, color=None):
        self.x = x
        self.y = y
        self.width = width
        self.title = title
        self.color = color or THEME["text_dim"]
        self.height = 24

    def draw(self, surface, font):
        pygame.draw.line(surface, THEME["divider"],
                         (self.x + 8, self.y + 8),
                         (self.x + self.width - 8, self.y + 8))
        title_surf = font.render(self.title, True, self.color)
        surface.blit(title_surf, (self.x + 8, self.y + 12))


class TextBlock:
    """Multi-line read-only text, refreshed by the owner via set_text()."""

    def __init__(self, x, y, width, lines=4, line_height=16):
        self.x = x
        self.y = y
        self.width = width
        self.line_height = line_height
        self.lines = [""] * lines
        self.height = lines * line_height

    def set_text(self, text):
        self.lines = text.split("\n")

    def draw(self, surface, font):
        for i, line in enumerate(self.lines):
            surf = font.render(line, True, THEME["text"])
            surface.blit(surf, (self.x + 8, self.y + i * self.line_height))


class ControlPanel:
    """
    Side panel containing all controls.
    Widgets are stacked top to bottom; events arrive in window coordinates
    and are translated to panel-local ones before dispatch.
    """

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.widgets = []
        self.surface = pygame.Surface((width, height))
        self._cursor_y = 8

    def add_section(self, title, color=None):
        header = SectionHeader(0, self._cursor_y, self.width, title, color)
        self.widgets.append(header)
        self._cursor_y += header.height + 4

    def add_selector(self, values, labels, on_select=None, active_color=None):
        row = SelectorRow(8, self._cursor_y, self.width - 16, values, labels,
                          on_select, active_color)
        self.widgets.append(row)
        self._cursor_y += row.total_height + 8
        return row

    def add_button(self, label, on_click=None):
        btn = Button(8, self._cursor_y, self.width - 16, 28, label, on_click)
        self.widgets.append(btn)
        self._cursor_y += 36
        return btn

    def add_text(self, lines=4):
        block = TextBlock(0, self._cursor_y, self.width, lines)
        self.widgets.append(block)
        self._cursor_y += block.height + 8
        return block

    def add_spacer(self, height=8):
        self._cursor_y += height

    def handle_event(self, event):
        """Returns True if a widget consumed the event."""
        if hasattr(event, "pos"):
            local_pos = (event.pos[0] - self.x, event.pos[1] - self.y)
            if not (0 <= local_pos[0] <= self.width and 0 <= local_pos[1] <= self.height):
                return False
            adjusted = pygame.event.Event(event.type, {
                **{k: v for k, v in event.__dict__.items() if k != "pos"},
                "pos": local_pos,
            })
        else:
            adjusted = event

        for widget in self.widgets:
            if hasattr(widget, "handle_event"):
                if widget.handle_event(adjusted):
                    return True
        return False

    def draw(self, target_surface, font):
        self.surface.fill(THEME["panel"])
        pygame.draw.line(self.surface, THEME["divider"], (0, 0), (0, self.height))
        for widget in self.widgets:
            widget.draw(self.surface, font)
        target_surface.blit(self.surface, (self.x, self.y))
