"""Tests for shape tests and the collision detector."""
import math

import pytest

from minigames.collision import (
    CollisionDetector,
    Outcome,
    angle_in_arc,
    award_passes,
    circle_arc_overlap,
    circle_polygon_overlap,
    circle_rect_overlap,
    circles_overlap,
    convex_polygons_overlap,
    normalize_angle,
    overlaps,
    rects_overlap,
)
from minigames.entities import Entity, Player, Role
from minigames.scoring import ScoreKeeper
from minigames.shapes import Arc, Circle, Polygon, Rect
from minigames.storage import MemoryStore


def at_angle(degrees: float, distance: float):
    rad = math.radians(degrees)
    return math.cos(rad) * distance, math.sin(rad) * distance


class TestPrimitiveTests:
    """Tests for the pure overlap functions."""

    def test_touching_circles_collide(self):
        """Contact is inclusive: distance == r1 + r2 is a hit."""
        assert circles_overlap(0, 0, 5, 10, 0, 5)

    def test_circles_one_unit_apart_do_not_collide(self):
        assert not circles_overlap(0, 0, 5, 11, 0, 5)

    def test_circle_overlap_is_symmetric(self):
        assert circles_overlap(3, 4, 2, 0, 0, 3) == circles_overlap(0, 0, 3, 3, 4, 2)

    def test_circle_rect(self):
        # Rect centered at origin, 20x10; circle touching its right edge
        assert circle_rect_overlap(15, 0, 5, 0, 0, 10, 5)
        assert not circle_rect_overlap(16, 0, 5, 0, 0, 10, 5)
        # Near a corner the distance is diagonal
        assert not circle_rect_overlap(14, 9, 5, 0, 0, 10, 5)

    def test_rects_touching(self):
        assert rects_overlap(0, 0, 5, 5, 10, 0, 5, 5)
        assert not rects_overlap(0, 0, 5, 5, 10.5, 0, 5, 5)

    def test_normalize_angle(self):
        assert normalize_angle(-math.pi / 2) == pytest.approx(3 * math.pi / 2)
        assert normalize_angle(2 * math.pi) == 0.0
        assert 0.0 <= normalize_angle(-1e-17) < 2 * math.pi

    @pytest.mark.parametrize("degrees", [5, 355, 350, 20, 0, 360])
    def test_arc_crossing_zero_contains(self, degrees):
        """An arc from 350 to 20 degrees wraps through 0."""
        assert angle_in_arc(math.radians(degrees), math.radians(350), math.radians(20))

    @pytest.mark.parametrize("degrees", [180, 90, 340, 21])
    def test_arc_crossing_zero_excludes(self, degrees):
        assert not angle_in_arc(math.radians(degrees), math.radians(350), math.radians(20))

    def test_arc_with_negative_start(self):
        """Arc.facing(0, ...) yields a negative start; same as the wrapped form."""
        arc = Arc.facing(0.0, math.radians(30), radius=50, thickness=6)
        assert angle_in_arc(math.radians(10), arc.start, arc.end)
        assert angle_in_arc(math.radians(350), arc.start, arc.end)
        assert not angle_in_arc(math.radians(20), arc.start, arc.end)

    def test_full_circle_arc(self):
        assert angle_in_arc(1.0, 0.0, 2 * math.pi)

    def test_circle_arc_band(self):
        arc = Arc(radius=50, thickness=6, start=math.radians(350), end=math.radians(20))
        x, y = at_angle(5, 50)
        assert circle_arc_overlap(x, y, 5, 0, 0, arc)
        x, y = at_angle(355, 50)
        assert circle_arc_overlap(x, y, 5, 0, 0, arc)
        x, y = at_angle(180, 50)
        assert not circle_arc_overlap(x, y, 5, 0, 0, arc)

    def test_circle_arc_outside_band(self):
        arc = Arc(radius=50, thickness=6, start=math.radians(350), end=math.radians(20))
        # Outer reach is 50 + 3 + 5 = 58
        assert circle_arc_overlap(58, 0, 5, 0, 0, arc)
        assert not circle_arc_overlap(59, 0, 5, 0, 0, arc)
        # Inner reach is 50 - 3 - 5 = 42
        assert circle_arc_overlap(42, 0, 5, 0, 0, arc)
        assert not circle_arc_overlap(41, 0, 5, 0, 0, arc)

    def test_circle_polygon(self):
        triangle = [(-10.0, 0.0), (0.0, -30.0), (10.0, 0.0)]
        assert circle_polygon_overlap(0, -5, 1, triangle)      # inside
        assert circle_polygon_overlap(0, 5, 5, triangle)       # touching the base
        assert not circle_polygon_overlap(0, 6, 5, triangle)

    def test_convex_polygons(self):
        square = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
        touching = [(10.0, 0.0), (20.0, 0.0), (20.0, 10.0), (10.0, 10.0)]
        apart = [(11.0, 0.0), (20.0, 0.0), (20.0, 10.0), (11.0, 10.0)]
        assert convex_polygons_overlap(square, touching)
        assert not convex_polygons_overlap(square, apart)


class TestOverlapDispatch:
    """Tests for overlaps() shape-pair dispatch."""

    def test_circle_circle(self):
        assert overlaps(Circle(5), 0, 0, Circle(5), 10, 0)

    def test_symmetric_pairs(self):
        rect = Rect(20, 10)
        circle = Circle(5)
        assert overlaps(circle, 15, 0, rect, 0, 0) == overlaps(rect, 0, 0, circle, 15, 0)

    def test_rect_polygon(self):
        spike = Polygon(vertices=((-10.0, 0.0), (0.0, -30.0), (10.0, 0.0)))
        assert overlaps(Rect(10, 10), 0, -5, spike, 0, 0)
        assert not overlaps(Rect(10, 10), 30, -5, spike, 0, 0)

    def test_arc_circle(self):
        arc = Arc.facing(0.0, math.radians(60), radius=50, thickness=6)
        assert overlaps(arc, 0, 0, Circle(5), 50, 0)

    def test_unsupported_pair(self):
        arc = Arc.facing(0.0, 1.0, radius=50, thickness=6)
        with pytest.raises(TypeError):
            overlaps(arc, 0, 0, Rect(10, 10), 50, 0)


class TestCollisionDetector:
    """Tests for CollisionDetector.evaluate."""

    @pytest.fixture
    def keeper(self):
        return ScoreKeeper('test_game', MemoryStore(), initial_lives=3)

    @pytest.fixture
    def player(self):
        return Player(x=0.0, y=0.0, shape=Circle(10))

    def hazard(self, x, y, points=0, radius=5.0):
        return Entity(x=x, y=y, shape=Circle(radius), role=Role.HAZARD, points=points)

    def test_hazard_hit_costs_life(self, player, keeper):
        detector = CollisionDetector(hit_flash=0.15)
        entity = self.hazard(15, 0)

        outcomes = detector.evaluate(player, [entity], keeper, now=2.0)

        assert [o.outcome for o in outcomes] == [Outcome.HIT]
        assert keeper.lives == 2
        assert entity.consumed
        assert player.hit_flash_until == pytest.approx(2.15)
        assert player.is_flashing(2.1)
        assert not player.is_flashing(2.2)

    def test_consumed_entity_never_hits_twice(self, player, keeper):
        detector = CollisionDetector()
        entity = self.hazard(15, 0)
        detector.evaluate(player, [entity], keeper, now=0.0)
        detector.evaluate(player, [entity], keeper, now=0.1)
        assert keeper.lives == 2

    def test_miss(self, player, keeper):
        detector = CollisionDetector()
        entity = self.hazard(16, 0)
        assert detector.evaluate(player, [entity], keeper, now=0.0) == []
        assert keeper.lives == 3
        assert not entity.consumed

    def test_shield_blocks_before_body(self, keeper):
        """An entity touching both shield and body is blocked, not a hit."""
        player = Player(x=0.0, y=0.0, shape=Circle(25),
                        shield=Arc.facing(0.0, math.radians(60), radius=30, thickness=6))
        entity = self.hazard(28, 0, points=1)

        outcomes = CollisionDetector().evaluate(player, [entity], keeper, now=0.0)

        assert [o.outcome for o in outcomes] == [Outcome.BLOCKED]
        assert outcomes[0].points == 1
        assert keeper.score == 1
        assert keeper.lives == 3
        assert entity.consumed

    def test_shield_facing_away_lets_hazard_through(self, keeper):
        player = Player(x=0.0, y=0.0, shape=Circle(25),
                        shield=Arc.facing(math.pi, math.radians(60), radius=50, thickness=6))
        entity = self.hazard(30, 0)
        outcomes = CollisionDetector().evaluate(player, [entity], keeper, now=0.0)
        assert [o.outcome for o in outcomes] == [Outcome.HIT]

    def test_target_collected(self, player, keeper):
        entity = Entity(x=5, y=0, shape=Circle(5), role=Role.TARGET, points=10)
        outcomes = CollisionDetector().evaluate(player, [entity], keeper, now=0.0)
        assert [o.outcome for o in outcomes] == [Outcome.COLLECTED]
        assert keeper.score == 10
        assert keeper.lives == 3

    def test_neutral_ignored(self, player, keeper):
        entity = Entity(x=0, y=0, shape=Circle(5), role=Role.NEUTRAL)
        assert CollisionDetector().evaluate(player, [entity], keeper, now=0.0) == []
        assert not entity.consumed

    def test_passed_entity_ignored(self, player, keeper):
        entity = self.hazard(0, 0)
        entity.passed = True
        assert CollisionDetector().evaluate(player, [entity], keeper, now=0.0) == []
        assert keeper.lives == 3

    def test_single_hit_per_tick(self, player, keeper):
        entities = [self.hazard(0, 0), self.hazard(1, 0)]
        outcomes = CollisionDetector(single_hit=True).evaluate(player, entities, keeper, now=0.0)
        assert len(outcomes) == 1
        assert keeper.lives == 2
        assert not entities[1].consumed

    def test_multiple_hits_per_tick(self, player, keeper):
        entities = [self.hazard(0, 0), self.hazard(1, 0)]
        outcomes = CollisionDetector().evaluate(player, entities, keeper, now=0.0)
        assert len(outcomes) == 2
        assert keeper.lives == 1

    def test_invincibility_ignores_hazards(self, player, keeper):
        detector = CollisionDetector(invincibility=2.0)
        first, second = self.hazard(0, 0), self.hazard(0, 0)

        detector.evaluate(player, [first], keeper, now=1.0)
        detector.evaluate(player, [second], keeper, now=2.0)

        assert keeper.lives == 2
        assert not second.consumed
        assert player.invincible_until == 3.0

        detector.evaluate(player, [second], keeper, now=3.0)
        assert keeper.lives == 1

    def test_stops_when_lives_run_out(self, player):
        keeper = ScoreKeeper('test_game', MemoryStore(), initial_lives=1)
        entities = [self.hazard(0, 0), self.hazard(1, 0)]
        CollisionDetector().evaluate(player, entities, keeper, now=0.0)
        assert keeper.lives == 0
        assert not entities[1].consumed

    def test_spawn_order(self, player, keeper):
        entities = [self.hazard(0, 0, points=0), self.hazard(2, 0, points=0)]
        entities[0].id, entities[1].id = 1, 2
        outcomes = CollisionDetector().evaluate(player, entities, keeper, now=0.0)
        assert [o.entity_id for o in outcomes] == [1, 2]


class TestAwardPasses:
    """Tests for pass scoring."""

    def test_awards_once(self):
        keeper = ScoreKeeper('test_game', MemoryStore())
        player = Player(x=100.0, y=0.0)
        entity = Entity(x=50, y=0, shape=Rect(10, 10), points=1)

        def left_of_player(e, p):
            return e.x < p.x

        award_passes(player, [entity], keeper, left_of_player)
        award_passes(player, [entity], keeper, left_of_player)

        assert entity.passed
        assert keeper.score == 1

    def test_consumed_not_awarded(self):
        keeper = ScoreKeeper('test_game', MemoryStore())
        entity = Entity(x=50, y=0, shape=Rect(10, 10), points=1, consumed=True)
        award_passes(Player(x=100.0, y=0.0), [entity], keeper, lambda e, p: True)
        assert keeper.score == 0
        assert not entity.passed
