"""
Slide Presenter Package

Presents a plain-text document as navigable slides: one slide per heading
line, laid out as background, header, body and footer regions.
"""

from .config import PresenterConfig, load_config
from .controller import PresentationController
from .layout_engine import LayoutEngine
from .models import Deck, Layout, Region, Slide
from .slide_parser import SlideParser, parse_slides

__all__ = [
    'PresentationController', 'LayoutEngine', 'SlideParser', 'parse_slides',
    'PresenterConfig', 'load_config', 'Deck', 'Slide', 'Region', 'Layout',
]
