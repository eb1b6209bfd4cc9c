"""
Minimal pygame renderer for world snapshots.

Draws every collider as flat geometry plus a HUD and state overlays.
Games needing real art replace this with their own render callback.
"""
from typing import Tuple

import pygame

from minigames.entities import Entity, Player, Role
from minigames.game_state import GameState
from minigames.shapes import Arc, Circle, Polygon, Rect, Shape
from minigames.world import WorldSnapshot

Color = Tuple[int, int, int]

BACKGROUND_COLOR: Color = (20, 20, 30)
PLAYER_COLOR: Color = (100, 200, 255)
PLAYER_HIT_COLOR: Color = (255, 80, 80)
SHIELD_COLOR: Color = (120, 255, 180)
ROLE_COLORS = {
    Role.HAZARD: (255, 120, 80),
    Role.TARGET: (255, 220, 100),
    Role.NEUTRAL: (90, 90, 110),
}
HUD_COLOR: Color = (200, 200, 200)


def draw_shape(screen: pygame.Surface, shape: Shape, x: float, y: float, color: Color) -> None:
    if isinstance(shape, Circle):
        pygame.draw.circle(screen, color, (int(x), int(y)), max(1, int(shape.radius)))
    elif isinstance(shape, Rect):
        left, top, _, _ = shape.box_at(x, y)
        pygame.draw.rect(screen, color, pygame.Rect(int(left), int(top),
                                                   int(shape.width), int(shape.height)))
    elif isinstance(shape, Polygon):
        pygame.draw.polygon(screen, color, [(int(px), int(py)) for px, py in shape.points_at(x, y)])
    elif isinstance(shape, Arc):
        outer = shape.radius + shape.thickness / 2
        bounds = pygame.Rect(int(x - outer), int(y - outer), int(outer * 2), int(outer * 2))
        # pygame arcs run counter-clockwise with y up; screen angles have y down
        pygame.draw.arc(screen, color, bounds, -shape.end, -shape.start,
                        max(1, int(shape.thickness)))


class SnapshotRenderer:
    """Render callback drawing a WorldSnapshot onto a pygame surface."""

    def __init__(self, screen: pygame.Surface, title: str = ""):
        self.screen = screen
        self.title = title
        self._font_large = pygame.font.Font(None, 72)
        self._font_medium = pygame.font.Font(None, 36)

    def __call__(self, snapshot: WorldSnapshot) -> None:
        self.draw(snapshot)

    def draw(self, snapshot: WorldSnapshot) -> None:
        self.screen.fill(BACKGROUND_COLOR)
        for entity in snapshot.entities:
            self._draw_entity(entity)
        self._draw_player(snapshot.player, snapshot.elapsed)
        self._draw_hud(snapshot)
        self._draw_overlay(snapshot)
        pygame.display.flip()

    def _draw_entity(self, entity: Entity) -> None:
        if entity.consumed:
            return
        draw_shape(self.screen, entity.shape, entity.x, entity.y, ROLE_COLORS[entity.role])

    def _draw_player(self, player: Player, now: float) -> None:
        color = PLAYER_HIT_COLOR if player.is_flashing(now) else PLAYER_COLOR
        draw_shape(self.screen, player.shape, player.x, player.y, color)
        if player.shield is not None:
            draw_shape(self.screen, player.shield, player.x, player.y, SHIELD_COLOR)

    def _draw_hud(self, snapshot: WorldSnapshot) -> None:
        text = self._font_medium.render(
            f"Score: {snapshot.score}   Lives: {snapshot.lives}   Best: {snapshot.high_score}",
            True, HUD_COLOR)
        self.screen.blit(text, (20, 20))

    def _draw_overlay(self, snapshot: WorldSnapshot) -> None:
        if snapshot.state is GameState.INTRO:
            lines = [self.title or "Get ready", "Starting..."]
        elif snapshot.state is GameState.PAUSED:
            lines = ["PAUSED", "P to resume"]
        elif snapshot.state is GameState.GAME_OVER and snapshot.overlay_visible:
            lines = ["GAME OVER", f"Score: {snapshot.score}   Best: {snapshot.high_score}",
                     "R to play again"]
        elif snapshot.state is GameState.ERROR:
            lines = ["ERROR", "See log output"]
        else:
            return

        center = snapshot.bounds.center
        center_x = int(center.x)
        y = int(center.y) - 60
        for i, line in enumerate(lines):
            font = self._font_large if i == 0 else self._font_medium
            text = font.render(line, True, (255, 255, 255))
            self.screen.blit(text, text.get_rect(center=(center_x, y)))
            y += 60
