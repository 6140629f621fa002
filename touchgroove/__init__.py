"""Clocks, swing triggers, arpeggiators, scales, record buffers, loopers and slicers for touch-pad instruments."""

__version__ = "0.1.0"