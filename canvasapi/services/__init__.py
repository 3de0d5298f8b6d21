"""Canvas services."""

from .canvas_service import CanvasResult, CanvasService, ChannelNotifier

__all__ = ["CanvasResult", "CanvasService", "ChannelNotifier"]
