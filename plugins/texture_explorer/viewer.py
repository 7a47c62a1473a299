"""
Interactive Pygame Viewer for the Texture Explorer

Shows the procedural texture on the left and a control panel on the right.
The texture is only re-rasterized after something changed (formula,
domain), not every frame.

Controls:
  0-9         Texture preset (same formula on R, G and B)
  R           Random texture
  C           Change coordinates (asks in the terminal)
  S           Save texture.png
  H           Toggle HUD overlay
  TAB         Toggle control panel
  Q / ESC     Quit
"""

import pygame

from .channels import CHANNELS, NUM_TEXTURES
from .commands import (
    KEY_BINDINGS, KEY_HELP, QUIT, RANDOM, SAVE, CommandKind, change_domain,
    channel, dispatch, texture,
)
from .controls import THEME, ControlPanel
from .domain import read_domain
from .errors import TextureError
from .explorer import TextureExplorer
from .formulas import OFF

PANEL_WIDTH = 300
WINDOW_TITLE = "SUPER TEXTURE EXPLORER"


class Viewer:
    def __init__(self, width=500, height=500, domain=None, explorer=None,
                 ask=input):
        """
        Args:
            width, height: Canvas size in pixels (one grid cell per pixel)
            domain: Initial (x_min, x_max, y_min, y_max), default [-100, 100]^2
            explorer: Existing TextureExplorer to display; overrides
                      width/height/domain when given
            ask: Terminal prompt used by Change Coordinates
        """
        if explorer is None:
            kwargs = {} if domain is None else {"domain": domain}
            explorer = TextureExplorer(width, height, **kwargs)
        self.explorer = explorer
        self.canvas_w = explorer.width
        self.canvas_h = explorer.height
        self.ask = ask

        self.running = True
        self.show_hud = True
        self.panel_visible = True
        self.needs_redraw = True

        self.canvas = None  # pygame.Surface with the last rasterized frame
        self.panel = None
        self.selectors = {}
        self.formula_text = None
        self.hud_font = None
        self.panel_font = None

    @property
    def total_w(self):
        return self.canvas_w + (PANEL_WIDTH if self.panel_visible else 0)

    # --- Commands ---

    def run_command(self, command):
        """Apply a command; errors are reported and the viewer keeps going."""
        if command.kind is CommandKind.QUIT:
            self.running = False
            return
        try:
            changed = dispatch(self.explorer, command,
                               ask_domain=self._ask_domain, capture=self._capture)
        except TextureError as e:
            print(f"[TX] {e}")
            return
        if command.kind is CommandKind.SAVE:
            print(f"[TX] Texture saved: {self.explorer.filename}")
        if changed:
            self.needs_redraw = True
            self._sync_panel()

    def _ask_domain(self):
        print()
        try:
            domain = read_domain(ask=self.ask)
        except (EOFError, KeyboardInterrupt):
            print("\n[TX] Coordinate change cancelled, domain unchanged")
            return None
        print(f"[TX] Domain set to x [{domain.x_min:g}, {domain.x_max:g}) "
              f"y [{domain.y_min:g}, {domain.y_max:g})")
        return domain

    def _capture(self):
        """Pixels currently on screen, as a (W, H, 3) surface array."""
        if self.canvas is None:
            return None
        return pygame.surfarray.array3d(self.canvas)

    # --- Rendering ---

    def _render_canvas(self):
        surface_array = self.explorer.render_surface()
        self.canvas = pygame.surfarray.make_surface(surface_array)
        self.needs_redraw = False
        r, g, b = (self.explorer.selection.label(c) for c in CHANNELS)
        print(f"[TX] Rendered R={r} G={g} B={b} "
              f"in {self.explorer.last_render_ms:.0f} ms")

    def _draw_hud(self, screen):
        if not self.show_hud:
            return
        stats = self.explorer.stats
        x0, x1, y0, y1 = stats["domain"]
        line = (f"R {stats['red']}  G {stats['green']}  B {stats['blue']}  |  "
                f"x [{x0:g}, {x1:g})  y [{y0:g}, {y1:g})  |  "
                f"{stats['render_ms']:.0f} ms")

        bg_surface = pygame.Surface((self.canvas_w, 24), pygame.SRCALPHA)
        bg_surface.fill((0, 0, 0, 140))
        screen.blit(bg_surface, (0, 0))
        text_surface = self.hud_font.render(line, True, (210, 215, 225))
        screen.blit(text_surface, (10, 6))

    # --- Panel ---

    def _build_panel(self):
        self.panel = ControlPanel(self.canvas_w, 0, PANEL_WIDTH, self.canvas_h)
        digits = [str(i) for i in range(NUM_TEXTURES)]

        self.panel.add_section("TEXTURE")
        self.selectors["texture"] = self.panel.add_selector(
            range(NUM_TEXTURES), digits,
            on_select=lambda i: self.run_command(texture(i)))

        for ch in CHANNELS:
            self.panel.add_section(ch.value.upper(), THEME[ch.value])
            self.selectors[ch] = self.panel.add_selector(
                range(OFF + 1), digits + ["Off"],
                on_select=lambda i, ch=ch: self.run_command(channel(ch, i)),
                active_color=THEME[ch.value])

        self.panel.add_section("FORMULAS")
        self.formula_text = self.panel.add_text(lines=4)

        self.panel.add_spacer()
        self.panel.add_button("Change Coordinates",
                              on_click=lambda: self.run_command(change_domain()))
        self.panel.add_button("Random Texture", on_click=lambda: self.run_command(RANDOM))
        self.panel.add_button("Save", on_click=lambda: self.run_command(SAVE))
        self.panel.add_button("Quit", on_click=lambda: self.run_command(QUIT))
        self._sync_panel()

    def _sync_panel(self):
        """Highlight the buttons that match the explorer state."""
        if self.panel is None:
            return
        r, g, b = self.explorer.indices
        for ch, index in zip(CHANNELS, (r, g, b)):
            self.selectors[ch].select_value(index)
        self.selectors["texture"].select_value(r if r == g == b else None)
        self.formula_text.set_text(self.explorer.describe())

    # --- Main loop ---

    def _handle_keydown(self, event):
        key = event.key
        if key == pygame.K_h:
            self.show_hud = not self.show_hud
            return
        if key == pygame.K_TAB:
            self.panel_visible = not self.panel_visible
            pygame.display.set_mode((self.total_w, self.canvas_h))
            return
        command = KEY_BINDINGS.get(pygame.key.name(key))
        if command is not None:
            self.run_command(command)

    def run(self):
        """Main viewer loop."""
        pygame.init()
        screen = pygame.display.set_mode((self.total_w, self.canvas_h))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 13)
        self.panel_font = pygame.font.SysFont("menlo", 12)
        self._build_panel()
        print(KEY_HELP)

        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    continue
                if event.type == pygame.KEYDOWN:
                    self._handle_keydown(event)
                    continue
                if self.panel_visible and self.panel:
                    self.panel.handle_event(event)

            if not self.running:
                break

            if self.needs_redraw:
                self._render_canvas()

            screen = pygame.display.get_surface()
            screen.fill(THEME["bg"])
            screen.blit(self.canvas, (0, 0))
            self._draw_hud(screen)
            if self.panel_visible and self.panel:
                self.panel.draw(screen, self.panel_font)

            pygame.display.flip()
            clock.tick(30)

        pygame.quit()
