"""Slider curve path providers."""

from mapsight.curves.path import CurveKind, CurvePath, SliderPath

__all__ = ["CurveKind", "CurvePath", "SliderPath"]
