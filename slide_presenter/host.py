"""
Host collaborator contract.

A host owns the actual drawing surface (a terminal, an editor, a test
double). The presentation controller only talks to it through the
methods below and never assumes anything about how a surface is drawn.
"""
import abc
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .models import Region


class HostEvent(str, Enum):
    """Event classes a host can notify handlers about."""
    SURFACE_LEFT = "surface-left"
    SURFACE_CLOSED = "surface-closed"
    SCREEN_RESIZED = "screen-resized"


@dataclass(frozen=True)
class SurfaceHandle:
    """Opaque reference to a host surface."""
    id: int
    name: str = ""


@dataclass(frozen=True)
class EventPayload:
    """What a host passes to event handlers."""
    kind: HostEvent
    surface: Optional[SurfaceHandle] = None
    width: Optional[int] = None
    height: Optional[int] = None


EventHandler = Callable[[EventPayload], Any]
KeyHandler = Callable[[], Any]


class Host(abc.ABC):

    @abc.abstractmethod
    def read_lines(self, source) -> List[str]:
        """Return the lines of *source* without trailing newlines."""

    @abc.abstractmethod
    def create_surface(self, region: Region, give_focus: bool = False, name: str = "") -> SurfaceHandle:
        """Allocate a surface laid out per *region*."""

    @abc.abstractmethod
    def write_content(self, surface: SurfaceHandle, lines: Sequence[str]) -> None:
        """Replace everything shown on *surface*. Raises StaleSurfaceError for dead handles."""

    @abc.abstractmethod
    def set_surface_geometry(self, surface: SurfaceHandle, region: Region) -> None:
        """Move/resize an existing surface. Raises StaleSurfaceError for dead handles."""

    @abc.abstractmethod
    def close_surface(self, surface: SurfaceHandle) -> None:
        """Release *surface*. A no-op if it is already closed."""

    @abc.abstractmethod
    def is_surface_valid(self, surface: SurfaceHandle) -> bool:
        """Check if *surface* is still alive."""

    @abc.abstractmethod
    def bind_key(self, surface: SurfaceHandle, mode: str, key: str, handler: KeyHandler) -> None:
        """Call *handler* when *key* is pressed while *surface* has focus."""

    @abc.abstractmethod
    def on_event(self, event: HostEvent, handler: EventHandler, surface: Optional[SurfaceHandle] = None) -> Any:
        """
        Register *handler* for *event*.

        When *surface* is given, only events about that surface are
        delivered. Returns a token accepted by :meth:`off_event`.
        """

    @abc.abstractmethod
    def off_event(self, token: Any) -> None:
        """Drop a registration made by :meth:`on_event`. Unknown tokens are ignored."""

    @abc.abstractmethod
    def get_screen_dimensions(self) -> Tuple[int, int]:
        """Return the usable ``(width, height)`` in cells."""

    @abc.abstractmethod
    def get_option(self, option_id: str) -> Any:
        """Return the current value of a display option."""

    @abc.abstractmethod
    def set_option(self, option_id: str, value: Any) -> None:
        """Change a display option."""
