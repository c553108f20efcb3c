"""Shared data model primitives."""

from vibefeed.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]
