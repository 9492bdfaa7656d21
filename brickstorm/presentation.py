"""Presentation adapters.

The simulation only pushes notifications into these objects; it never reads
anything back. ``Presentation`` is the headless no-op version and
``PygameRenderer`` draws every frame onto an off-screen surface.
"""

import colorsys

import numpy as np
import pygame
import pygame.gfxdraw

from . import config


class Presentation:
    def new_game(self):
        pass

    def render(self, paddle, balls, bricks, pickups, current_level, lasers=()):
        return np.zeros((config.HEIGHT, config.WIDTH, 3), dtype=np.uint8)

    def update_score_display(self, score):
        pass

    def update_lives_display(self, lives):
        pass

    def set_powerup_indicator(self, kind, on):
        pass

    def show_banner(self, text):
        pass

    def clear_banner(self):
        pass

    def show_terminal_screen(self, title, subtitle, final_score):
        pass

    def close(self):
        pass


def row_color(row, rows=config.BRICK_ROWS):
    r, g, b = colorsys.hls_to_rgb(row / rows, 0.5, 0.7)
    return (int(r * 255), int(g * 255), int(b * 255))


class PygameRenderer(Presentation):
    def __init__(self):
        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((config.WIDTH, config.HEIGHT))
        self.font_small = pygame.font.SysFont("arial", 12)
        self.font_ui = pygame.font.SysFont("arial", 24)
        self.font_msg = pygame.font.SysFont("arial", 48)
        self.new_game()

    # --- Notifications ---
    def new_game(self):
        self.score = 0
        self.lives = config.INITIAL_LIVES
        self.indicators = {kind: False for kind in config.POWERUP_KINDS}
        self.banner = None
        self.terminal = None

    def update_score_display(self, score):
        self.score = score

    def update_lives_display(self, lives):
        self.lives = lives

    def set_powerup_indicator(self, kind, on):
        if kind in self.indicators:
            self.indicators[kind] = on

    def show_banner(self, text):
        self.banner = text

    def clear_banner(self):
        self.banner = None

    def show_terminal_screen(self, title, subtitle, final_score):
        self.terminal = (title, subtitle, final_score)

    # --- Drawing ---
    def render(self, paddle, balls, bricks, pickups, current_level, lasers=()):
        self.screen.fill(config.COLOR_BG)
        self._render_game(paddle, balls, bricks, pickups, lasers)
        self._render_ui(current_level)
        if self.terminal:
            self._render_terminal()
        elif self.banner:
            self._render_overlay([(self.banner, self.font_msg)])

        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _render_game(self, paddle, balls, bricks, pickups, lasers):
        for brick in bricks:
            if not brick.active:
                continue
            rect = brick.rect()
            pygame.draw.rect(self.screen, row_color(brick.row), rect)
            label = self.font_small.render(str(brick.strength), True, config.COLOR_TEXT)
            self.screen.blit(label, label.get_rect(center=rect.center))

        for pickup in pickups:
            pygame.draw.rect(self.screen, config.COLOR_POWERUPS[pickup.kind], pickup.rect())

        for laser in lasers:
            pygame.draw.rect(self.screen, config.COLOR_LASER, laser.rect())

        pygame.draw.rect(self.screen, config.COLOR_PADDLE, paddle.rect())

        for ball in balls:
            x, y = int(ball.x), int(ball.y)
            pygame.gfxdraw.aacircle(self.screen, x, y, ball.radius, config.COLOR_BALL)
            pygame.gfxdraw.filled_circle(self.screen, x, y, ball.radius, config.COLOR_BALL)

    def _render_ui(self, current_level):
        level_text = self.font_ui.render(f"Level {min(current_level, config.MAX_LEVELS)}", True, config.COLOR_TEXT)
        self.screen.blit(level_text, (10, 10))

        hud = self.font_ui.render(f"Score: {self.score}   Lives: {self.lives}", True, config.COLOR_TEXT)
        self.screen.blit(hud, (config.WIDTH - hud.get_width() - 10, 10))

        # Power-up indicators, lit while the effect runs
        x = config.WIDTH // 2 - 45
        for kind in config.POWERUP_KINDS:
            color = config.COLOR_POWERUPS[kind] if self.indicators[kind] else config.COLOR_INDICATOR_OFF
            pygame.draw.rect(self.screen, color, pygame.Rect(x, 14, 24, 16), border_radius=3)
            x += 33

    def _render_overlay(self, lines):
        overlay = pygame.Surface((config.WIDTH, config.HEIGHT), pygame.SRCALPHA)
        overlay.fill(config.COLOR_OVERLAY)
        self.screen.blit(overlay, (0, 0))

        total = sum(font.get_height() + 10 for _, font in lines)
        y = config.HEIGHT // 2 - total // 2
        for text, font in lines:
            img = font.render(text, True, config.COLOR_TEXT)
            self.screen.blit(img, (config.WIDTH // 2 - img.get_width() // 2, y))
            y += img.get_height() + 10

    def _render_terminal(self):
        title, subtitle, final_score = self.terminal
        lines = [(title, self.font_msg)]
        if subtitle:
            lines.append((subtitle, self.font_msg))
        lines.append((f"Final Score: {final_score}", self.font_ui))
        self._render_overlay(lines)

    def close(self):
        pygame.quit()
