"""Test layout engine functionality."""

import pytest
from slide_presenter.layout_engine import LayoutEngine
from slide_presenter.models import BorderStyle


@pytest.mark.parametrize("width,height", [(80, 24), (120, 40), (40, 12)])
def test_region_formulas(width, height):
    """Body is inset by 8 columns and loses header, footer and border rows."""
    layout = LayoutEngine().compute_regions(width, height)

    assert layout.body.width == width - 8
    assert layout.body.height == height - 3 - 1 - 3
    assert layout.body.row == 4
    assert layout.body.col == 8
    assert layout.footer.row == height - 1


def test_background_covers_screen_below_everything():
    layout = LayoutEngine().compute_regions(80, 24)

    bg = layout.background
    assert (bg.width, bg.height, bg.row, bg.col) == (80, 24, 0, 1)
    assert bg.border == BorderStyle.NONE
    for name, region in layout.items():
        if name != "background":
            assert region.z_index > bg.z_index


def test_header_and_footer_stack_above_body():
    layout = LayoutEngine().compute_regions(80, 24)

    assert layout.header.z_index > layout.body.z_index
    assert layout.footer.z_index > layout.body.z_index


def test_header_does_not_cover_body():
    layout = LayoutEngine().compute_regions(80, 24)

    assert layout.header.border == BorderStyle.ROUNDED
    assert layout.header.height == 1
    assert layout.header.outer_height == 3
    assert layout.header.bottom <= layout.body.row


def test_body_stays_above_footer():
    layout = LayoutEngine().compute_regions(100, 30)

    assert layout.body.bottom <= layout.footer.row


def test_body_uses_blank_border_and_footer_none():
    layout = LayoutEngine().compute_regions(80, 24)

    assert layout.body.border == BorderStyle.BLANK
    assert layout.body.has_border
    assert layout.footer.border == BorderStyle.NONE
    assert layout.footer.height == 1


def test_layout_is_deterministic():
    engine = LayoutEngine()

    assert engine.compute_regions(90, 30) == engine.compute_regions(90, 30)


def test_tiny_screen_is_clamped():
    layout = LayoutEngine().compute_regions(4, 3)

    assert layout.body.width >= 1
    assert layout.body.height >= 1
    assert layout.footer.row == 2


def test_layout_lookup_by_name():
    layout = LayoutEngine().compute_regions(80, 24)

    assert layout["body"] is layout.body
    assert [name for name, _ in layout.items()] == ["background", "header", "body", "footer"]
    with pytest.raises(KeyError):
        layout["sidebar"]
