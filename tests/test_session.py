"""Session lifecycle tests and end-to-end drop scenarios."""

import pytest

from galton.board.constants import BALL_RADIUS, MAX_X, MAX_Y, WALL_WIDTH
from galton.board.interactions import add_ball
from galton.board.session import BoardSession, FixedClock, WallClock
from galton.board.tags import EntityTag, get_tag

from helpers import run_for, with_tag

DT = 1 / 60.0
REST_HEIGHT = WALL_WIDTH + BALL_RADIUS  # Centroid of a ball resting on the floor


class RecordingRenderer:

    def __init__(self):
        self.bounds = None
        self.draws = 0

    def init(self, lower, upper):
        self.bounds = (lower, upper)

    def draw(self, scene):
        self.draws += 1


class TestClocks:

    def test_fixed_clock(self):
        clock = FixedClock(0.02)
        assert clock.time_since_last_tick() == 0.02
        assert clock.time_since_last_tick() == 0.02

    def test_fixed_clock_rejects_nonpositive_step(self):
        with pytest.raises(ValueError):
            FixedClock(0.0)

    def test_wall_clock_is_monotonic(self):
        clock = WallClock()
        assert clock.time_since_last_tick() >= 0.0
        assert clock.time_since_last_tick() >= 0.0


class TestBoardSession:

    @pytest.fixture
    def session(self):
        with BoardSession(clock=FixedClock(DT), seed=1) as s:
            yield s

    def test_init_builds_board(self, session):
        assert len(with_tag(session.scene, EntityTag.GRAVITY_SOURCE)) == 1
        assert get_tag(session.floor) == EntityTag.FROZEN
        assert session.falling_balls() == []

    def test_first_tick_spawns(self, session):
        assert session.tick() == DT
        assert len(session.falling_balls()) == 1
        assert session.scene.frame == 1

    def test_spawns_follow_interval(self, session):
        session.run(int(round(2.5 / DT)))
        # t=0, then every time the counter passes 1 s
        assert session.spawner.spawned == 3

    def test_renderer_lifecycle(self):
        renderer = RecordingRenderer()
        with BoardSession(clock=FixedClock(DT), renderer=renderer, seed=0) as session:
            session.run(5)
        assert renderer.bounds == ((0.0, 0.0), (MAX_X, MAX_Y))
        assert renderer.draws == 5

    def test_close_releases_scene(self):
        session = BoardSession(clock=FixedClock(DT), seed=0)
        session.run(3)
        session.close()
        assert session.closed
        assert session.scene.entity_count == 0
        assert session.scene.interaction_count == 0
        with pytest.raises(RuntimeError):
            session.tick()
        session.close()  # Second close is harmless

    def test_tag_exclusivity_and_only_balls_removed(self, session):
        permanent = [e for e in session.scene.entities
                     if get_tag(e) in (EntityTag.OBSTACLE, EntityTag.GRAVITY_SOURCE)]
        for _ in range(int(round(6.0 / DT))):
            before = {e.entity_id: e for e in session.scene.entities}
            session.tick()
            after = {e.entity_id for e in session.scene.entities}
            for entity_id, entity in before.items():
                if entity_id not in after:
                    assert entity.is_removed
                    assert get_tag(entity) == EntityTag.BALL
            for entity in session.scene.entities:
                assert isinstance(entity.info, EntityTag)

        assert all(not e.is_removed for e in permanent)
        assert all(get_tag(e) in (EntityTag.OBSTACLE, EntityTag.GRAVITY_SOURCE)
                   for e in permanent)

    def test_seeded_sessions_are_reproducible(self):
        states = []
        for _ in range(2):
            with BoardSession(clock=FixedClock(DT), seed=11) as session:
                session.run(int(round(3.0 / DT)))
                states.append(session.scene.get_state())
        assert states[0] == states[1]


class TestDropScenarios:

    def test_single_ball_freezes_on_floor(self, drop_scene):
        scene, floor = drop_scene
        ball = add_ball(scene, (MAX_X / 2, 20.0), (0.0, -8.0))

        run_for(scene, 5.0)

        assert ball.is_removed
        assert with_tag(scene, EntityTag.BALL) == []
        frozen = [e for e in with_tag(scene, EntityTag.FROZEN) if e is not floor]
        assert len(frozen) == 1
        assert frozen[0].centroid.x == pytest.approx(MAX_X / 2, abs=1e-6)
        assert frozen[0].centroid.y == pytest.approx(REST_HEIGHT, abs=0.5)
        assert not floor.is_removed

    def test_ball_accelerates_like_surface_gravity(self, drop_scene):
        scene, _ = drop_scene
        ball = add_ball(scene, (MAX_X / 2, 60.0), (0.0, 0.0))
        run_for(scene, 1.0)
        assert ball.velocity.y == pytest.approx(-9.8, rel=0.01)
        assert ball.velocity.x == pytest.approx(0.0, abs=1e-9)

    def test_second_ball_stacks_on_first(self, drop_scene):
        scene, floor = drop_scene
        add_ball(scene, (MAX_X / 2, 20.0), (0.0, -8.0))
        run_for(scene, 0.3)
        add_ball(scene, (MAX_X / 2, 20.0), (0.0, -8.0))

        run_for(scene, 5.0)

        frozen = sorted((e for e in with_tag(scene, EntityTag.FROZEN) if e is not floor),
                        key=lambda e: e.centroid.y)
        assert len(frozen) == 2
        lower, upper = frozen
        assert lower.centroid.y == pytest.approx(REST_HEIGHT, abs=0.5)
        assert upper.centroid.y - lower.centroid.y == pytest.approx(2 * BALL_RADIUS, abs=0.5)
        assert upper.centroid.x == pytest.approx(MAX_X / 2, abs=1e-6)

    def test_ball_dropped_next_frame_freezes_on_first(self, drop_scene):
        scene, floor = drop_scene
        add_ball(scene, (MAX_X / 2, 20.0), (0.0, -8.0))
        scene.advance(DT)
        second = add_ball(scene, (MAX_X / 2, 20.0 + 3 * BALL_RADIUS), (0.0, -8.0))

        run_for(scene, 5.0)

        assert second.is_removed
        assert with_tag(scene, EntityTag.BALL) == []
        frozen = sorted((e for e in with_tag(scene, EntityTag.FROZEN) if e is not floor),
                        key=lambda e: e.entity_id)
        assert len(frozen) == 2
        first_frozen, second_frozen = frozen
        assert first_frozen.centroid.y == pytest.approx(REST_HEIGHT, abs=0.5)
        # Resting on the first ball's replacement, not on the floor
        assert second_frozen.centroid.y - first_frozen.centroid.y == pytest.approx(
            2 * BALL_RADIUS, abs=0.5)
        assert second_frozen.centroid.x == pytest.approx(MAX_X / 2, abs=1e-6)

    def test_pile_grows_on_full_board(self):
        with BoardSession(clock=FixedClock(DT), seed=5) as session:
            session.run(int(round(20.0 / DT)))
            settled = session.settled_balls()
            assert len(settled) > 0
            assert len(settled) + len(session.falling_balls()) == session.spawner.spawned
            for entity in settled:
                assert 0.0 < entity.centroid.x < MAX_X
                assert entity.centroid.y > WALL_WIDTH
