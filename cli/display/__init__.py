"""
CLI display modules.
"""

from cli.display.hex_view import display_frame_header

__all__ = [
    "display_frame_header",
]
