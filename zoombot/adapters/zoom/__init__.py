"""Zoom API adapters."""

from zoombot.adapters.zoom.auth import SAFETY_MARGIN, ZoomTokenClient
from zoombot.adapters.zoom.messenger import ZoomMessenger

__all__ = ["SAFETY_MARGIN", "ZoomTokenClient", "ZoomMessenger"]
