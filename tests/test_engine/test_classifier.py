"""Tests for object classification and stack resolution."""

import numpy as np
import pytest

from mapsight.engine.classifier import is_positional, resolve
from mapsight.engine.context import ModelContractError, ObjectKind, PlacedObject, StackingInfo, circle, slider
from tests.conftest import StubPath


def test_spinner_is_skipped():
    spinner = PlacedObject(ObjectKind.SPINNER, 0, (256.0, 192.0))
    assert not is_positional(spinner)
    assert resolve(spinner, 0, 10.0) is None


def test_unstacked_circle():
    r = resolve(circle(0, 100.0, 120.0), 3, 10.0)
    assert r is not None
    assert r.index == 3
    assert r.radius == 10.0
    assert r.head == (100.0, 120.0)
    assert r.stacked_head == (100.0, 120.0)
    assert r.stack_index == 0
    assert r.stacked_offset == (0.0, 0.0)
    assert not r.is_slider
    assert r.end is None
    assert len(r.stacked_samples()) == 0


def test_stacked_circle():
    r = resolve(circle(0, 100.0, 120.0, StackingInfo.from_index(2, 10.0)), 0, 10.0)
    assert r.stack_index == 2
    assert r.head == (100.0, 120.0)
    assert r.stacked_head == (98.0, 118.0)


def test_slider_samples_follow_stack_offset():
    path = StubPath("B", [(10.0, 10.0), (20.0, 10.0), (30.0, 20.0)])
    r = resolve(slider(0, path, StackingInfo.from_index(-1, 10.0)), 0, 10.0)
    assert r.is_slider
    assert r.end == (30.0, 20.0)
    assert np.allclose(r.stacked_samples(), [[11.0, 11.0], [21.0, 11.0], [31.0, 21.0]])


def test_negative_radius_rejected():
    with pytest.raises(ModelContractError):
        resolve(circle(0, 1.0, 1.0), 0, -1.0)


def test_slider_without_samples_rejected():
    obj = PlacedObject(ObjectKind.SLIDER, 0, (1.0, 1.0), path=StubPath("B", np.empty((0, 2))))
    with pytest.raises(ModelContractError):
        resolve(obj, 0, 10.0)
