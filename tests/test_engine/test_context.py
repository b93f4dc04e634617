"""Tests for the immutable object model."""

import dataclasses

import pytest

from mapsight.curves.path import CurveKind, SliderPath
from mapsight.engine.context import (
    Beatmap,
    DifficultyParameters,
    ObjectKind,
    PlacedObject,
    StackingInfo,
    circle,
    slider,
)


def test_circle_radius_from_circle_size():
    assert abs(DifficultyParameters(circle_size=4).circle_radius() - 36.48) < 1e-9
    assert abs(DifficultyParameters(circle_size=5).circle_radius() - 32.0) < 1e-9
    # smaller circles for higher CS
    assert DifficultyParameters(7).circle_radius() < DifficultyParameters(3).circle_radius()


def test_stacking_offset_moves_up_left_for_positive_index():
    assert StackingInfo.from_index(2, 10.0).offset == (-2.0, -2.0)
    assert StackingInfo.from_index(-1, 10.0).offset == (1.0, 1.0)
    assert StackingInfo.from_index(0, 10.0).offset == (0.0, 0.0)


def test_stacked_position():
    obj = circle(0, 100.0, 100.0, stacking=StackingInfo.from_index(3, 10.0))
    assert obj.position == (100.0, 100.0)
    assert obj.stacked_position == (97.0, 97.0)
    assert circle(0, 5.0, 6.0).stacked_position == (5.0, 6.0)


def test_slider_end_time_and_position():
    path = SliderPath(CurveKind.LINEAR, [(0, 0), (100, 0)], duration=250)
    once = slider(1000, path)
    assert once.kind == ObjectKind.SLIDER
    assert once.position == (0.0, 0.0)
    assert once.end_time == 1250
    assert once.end_position == (100.0, 0.0)

    # a repeat brings the slider back to its head
    twice = slider(1000, path, slides=2)
    assert twice.end_time == 1500
    assert twice.end_position == (0.0, 0.0)


def test_model_is_frozen():
    obj = circle(0, 1.0, 2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        obj.time = 5  # type: ignore[misc]
    beatmap = Beatmap(objects=[obj])
    assert isinstance(beatmap.objects, tuple)
    assert beatmap.num_objects == 1


def test_circle_has_no_tail():
    obj = PlacedObject(ObjectKind.CIRCLE, 10, (1.0, 1.0))
    assert not obj.is_slider
    assert obj.end_time == 10
    assert obj.end_position == (1.0, 1.0)
