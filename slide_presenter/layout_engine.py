#!/usr/bin/env python3
"""Layout engine computing the presentation regions for a given screen size."""

import logging

from .models import BorderStyle, Layout, Region

logger = logging.getLogger(__name__)

# One content row plus a top and bottom border
HEADER_HEIGHT = 1 + 2
# One content row, no border
FOOTER_HEIGHT = 1
# Rows kept free around the body: its own two border rows plus one spare
BODY_RESERVED_ROWS = 2 + 1
BODY_MARGIN = 8
BODY_TOP = 4


class LayoutEngine:
    """
    Computes the background, header, body and footer regions.

    The computation is pure: the same screen size always produces the same
    :class:`Layout`, so it can be rerun on every resize.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug

    def body_height(self, screen_height: int) -> int:
        """Rows available to slide body text on a screen *screen_height* rows tall."""
        return screen_height - HEADER_HEIGHT - FOOTER_HEIGHT - BODY_RESERVED_ROWS

    def compute_regions(self, screen_width: int, screen_height: int) -> Layout:
        """
        Compute all regions for a screen of the given size.

        Sizes are clamped to at least one cell so a tiny terminal still
        yields a usable (if cramped) layout.

        Args:
            screen_width: Usable screen width in columns
            screen_height: Usable screen height in rows

        Returns:
            Layout holding the four regions
        """
        width = max(1, screen_width)
        height = max(1, screen_height)

        layout = Layout(
            background=Region(
                width=width,
                height=height,
                row=0,
                col=1,
                z_index=1,
            ),
            header=Region(
                width=width,
                height=1,
                row=0,
                col=1,
                z_index=3,
                border=BorderStyle.ROUNDED,
            ),
            body=Region(
                width=max(1, width - BODY_MARGIN),
                height=max(1, self.body_height(height)),
                row=BODY_TOP,
                col=BODY_MARGIN,
                z_index=2,
                border=BorderStyle.BLANK,
            ),
            footer=Region(
                width=width,
                height=1,
                row=height - 1,
                col=1,
                z_index=3,
            ),
        )

        if self.debug:
            logger.debug(f"Layout for {screen_width}x{screen_height}: body {layout.body.width}x{layout.body.height}")
        return layout
