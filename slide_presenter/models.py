"""
Data models for the slide presenter.
"""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass
class Slide:
    """
    One titled unit of displayed content.

    ``title`` is the heading line exactly as written, marker included.
    ``body`` holds every line between this heading and the next one.
    """
    title: str = ""
    body: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "body": list(self.body)}


@dataclass
class Deck:
    """Ordered collection of slides parsed from one source document."""
    slides: List[Slide] = field(default_factory=list)

    def __len__(self):
        return len(self.slides)

    def slide(self, index: int) -> Slide:
        """Return the slide at 1-based *index*."""
        return self.slides[index - 1]

    def to_dict(self) -> Dict[str, Any]:
        return {"slides": [slide.to_dict() for slide in self.slides]}


class BorderStyle(str, Enum):
    """Border drawn around a region."""
    NONE = "none"
    ROUNDED = "rounded"
    # Blank glyphs: takes up border space without drawing anything
    BLANK = "blank"


@dataclass(frozen=True)
class Region:
    """
    Rectangular on-screen area.

    ``width``/``height`` describe the content area; a bordered region
    occupies one extra cell on every side (see :attr:`outer_width`).
    """
    width: int
    height: int
    row: int
    col: int
    z_index: int = 0
    border: BorderStyle = BorderStyle.NONE

    @property
    def has_border(self):
        return self.border != BorderStyle.NONE

    @property
    def outer_width(self):
        return self.width + 2 if self.has_border else self.width

    @property
    def outer_height(self):
        return self.height + 2 if self.has_border else self.height

    @property
    def bottom(self):
        """First row below the region, border included."""
        return self.row + self.outer_height

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["border"] = self.border.value
        return data


@dataclass(frozen=True)
class Layout:
    """The four regions making up a presentation screen."""
    background: Region
    header: Region
    body: Region
    footer: Region

    NAMES = ("background", "header", "body", "footer")

    def __getitem__(self, name: str) -> Region:
        if name not in self.NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def items(self):
        """Yield ``(name, region)`` pairs in creation order."""
        for name in self.NAMES:
            yield name, getattr(self, name)


@dataclass
class OptionOverride:
    """A host display option changed for the duration of a session."""
    option_id: str
    present_value: Any
    original_value: Any = None


class SessionPhase(str, Enum):
    """Lifecycle of a presentation session."""
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    CLOSED = "closed"


@dataclass
class PresentationState:
    """
    Session state owned by a :class:`~slide_presenter.controller.PresentationController`.

    ``current_slide`` is 1-based and kept within ``[1, len(deck)]``.
    """
    deck: Deck = field(default_factory=Deck)
    current_slide: int = 1
    layout: Optional[Layout] = None

    @property
    def slide_count(self):
        return len(self.deck)

    @property
    def slide(self) -> Optional[Slide]:
        if not self.deck.slides:
            return None
        return self.deck.slide(self.current_slide)
