"""Protocols for the slider's external collaborators."""

from carousel_slider.ports.clock import FrameCallback, FrameClock

__all__ = ["FrameCallback", "FrameClock"]
