"""Tests for the interaction policy applied when a ball is created."""

import pytest

from galton.board.constants import (
    BALL_ELASTICITY,
    BALL_MASS,
    BALL_RADIUS,
    G,
    PEG_ELASTICITY,
    START_VELOCITY,
)
from galton.board.freeze import freeze
from galton.board.interactions import add_ball, make_ball, register_interactions
from galton.board.tags import EntityTag, get_tag
from galton.physics.forces import InteractionKind
from galton.physics.objects import create_circle_entity

from helpers import with_tag


class TestMakeBall:

    def test_ball_properties(self):
        ball = make_ball((40.0, 77.0), START_VELOCITY)
        assert get_tag(ball) == EntityTag.BALL
        assert ball.mass == BALL_MASS
        assert ball.shape.radius == BALL_RADIUS
        assert not ball.is_immobile
        assert tuple(ball.velocity) == pytest.approx(START_VELOCITY)


class TestRegisterInteractions:

    def test_one_registration_per_existing_entity(self, board_scene):
        existing = board_scene.entities
        before = board_scene.interaction_count
        ball = add_ball(board_scene, (40.0, 77.0), START_VELOCITY)

        assert board_scene.interaction_count - before == len(existing)
        for other in existing:
            assert len(board_scene.interactions_between(ball, other)) == 1

    def test_policy_per_tag(self, board_scene):
        ball = add_ball(board_scene, (40.0, 77.0), START_VELOCITY)

        for other in board_scene.entities:
            if other is ball:
                continue
            (interaction,) = board_scene.interactions_between(ball, other)
            tag = get_tag(other)
            if tag == EntityTag.OBSTACLE:
                assert interaction.kind == InteractionKind.PHYSICS_COLLISION
                assert interaction.elasticity == PEG_ELASTICITY
            elif tag == EntityTag.FROZEN:
                assert interaction.kind == InteractionKind.COLLISION
                assert interaction.handler is freeze
                assert interaction.aux is board_scene
                assert interaction.entity_a is ball
                assert interaction.entity_b is other
            elif tag == EntityTag.GRAVITY_SOURCE:
                assert interaction.kind == InteractionKind.NEWTONIAN_GRAVITY
                assert interaction.constant == G
            else:
                pytest.fail(f"Unexpected tag {tag}")

    def test_ball_pairs_bounce(self, board_scene):
        first = add_ball(board_scene, (38.0, 77.0), START_VELOCITY)
        second = add_ball(board_scene, (42.0, 77.0), START_VELOCITY)

        (interaction,) = board_scene.interactions_between(second, first)
        assert interaction.kind == InteractionKind.PHYSICS_COLLISION
        assert interaction.elasticity == BALL_ELASTICITY

    def test_ball_not_paired_with_itself(self, board_scene):
        ball = add_ball(board_scene, (40.0, 77.0), START_VELOCITY)
        assert board_scene.interactions_between(ball, ball) == []

    def test_removed_entities_are_skipped(self, drop_scene):
        scene, floor = drop_scene
        gone = add_ball(scene, (30.0, 50.0), START_VELOCITY)
        scene.remove_entity(gone)

        ball = make_ball((40.0, 50.0), START_VELOCITY)
        scene.add_entity(ball)
        count = register_interactions(scene, ball, [gone, floor])

        assert count == 1
        assert scene.interactions_between(ball, gone) == []

    def test_later_entities_are_not_paired(self, drop_scene):
        """A ball is wired only against what existed when it was created."""
        scene, _ = drop_scene
        first = add_ball(scene, (30.0, 50.0), START_VELOCITY)
        second = add_ball(scene, (50.0, 50.0), START_VELOCITY)
        # The single registration comes from the second ball's creation pass
        assert len(scene.interactions_between(first, second)) == 1
        (interaction,) = scene.interactions_between(first, second)
        assert interaction.entity_a is second

    def test_untagged_entity_is_rejected(self, scene):
        stray = scene.add_entity(create_circle_entity(1.0, 1.0, (1, 1, 1), info="mystery"))
        ball = scene.add_entity(make_ball((0.0, 0.0), (0.0, 0.0)))
        with pytest.raises(TypeError):
            register_interactions(scene, ball, [stray])

    def test_add_ball_lists_the_ball(self, drop_scene):
        scene, _ = drop_scene
        ball = add_ball(scene, (40.0, 50.0), START_VELOCITY)
        assert with_tag(scene, EntityTag.BALL) == [ball]
        assert scene.get_entity(scene.entity_count - 1) is ball
