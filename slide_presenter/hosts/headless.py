"""
In-memory host.

Keeps every surface as a plain record instead of drawing it, so a
presentation can be driven and inspected without a terminal: keys and
events are injected with :meth:`HeadlessHost.press` and
:meth:`HeadlessHost.emit`.
"""
import itertools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..exceptions import StaleSurfaceError
from ..host import EventHandler, EventPayload, Host, HostEvent, KeyHandler, SurfaceHandle
from ..models import Region

logger = logging.getLogger(__name__)


@dataclass
class SurfaceRecord:
    """Everything the headless host knows about one surface."""
    handle: SurfaceHandle
    region: Region
    lines: List[str] = field(default_factory=list)
    keys: Dict[Tuple[str, str], KeyHandler] = field(default_factory=dict)
    valid: bool = True


class HeadlessHost(Host):
    """
    Host double that records what would have been drawn.
    """

    def __init__(self, width: int = 80, height: int = 24, options: Optional[Dict[str, Any]] = None):
        self.width = width
        self.height = height
        self.options: Dict[str, Any] = {"cmdheight": 1}
        if options:
            self.options.update(options)
        self.surfaces: Dict[int, SurfaceRecord] = {}
        self.focused: Optional[SurfaceHandle] = None
        # Every set_option call, in order
        self.option_log: List[Tuple[str, Any]] = []
        self._ids = itertools.count(1)
        self._handlers: Dict[int, Tuple[HostEvent, EventHandler, Optional[SurfaceHandle]]] = {}

    # -- Host contract ---------------------------------------------------

    def read_lines(self, source) -> List[str]:
        if isinstance(source, (list, tuple)):
            return list(source)
        return Path(source).read_text(encoding="utf-8").splitlines()

    def create_surface(self, region: Region, give_focus: bool = False, name: str = "") -> SurfaceHandle:
        handle = SurfaceHandle(id=next(self._ids), name=name)
        self.surfaces[handle.id] = SurfaceRecord(handle=handle, region=region)
        if give_focus:
            self.focused = handle
        return handle

    def write_content(self, surface: SurfaceHandle, lines: Sequence[str]) -> None:
        self._record(surface).lines = list(lines)

    def set_surface_geometry(self, surface: SurfaceHandle, region: Region) -> None:
        self._record(surface).region = region

    def close_surface(self, surface: SurfaceHandle) -> None:
        record = self.surfaces.get(surface.id)
        if record is None or not record.valid:
            return
        record.valid = False
        if self.focused == surface:
            self.focused = None
        self.emit(HostEvent.SURFACE_CLOSED, surface=surface)

    def is_surface_valid(self, surface: SurfaceHandle) -> bool:
        record = self.surfaces.get(surface.id)
        return record is not None and record.valid

    def bind_key(self, surface: SurfaceHandle, mode: str, key: str, handler: KeyHandler) -> None:
        self._record(surface).keys[(mode, key)] = handler

    def on_event(self, event: HostEvent, handler: EventHandler, surface: Optional[SurfaceHandle] = None) -> int:
        token = next(self._ids)
        self._handlers[token] = (HostEvent(event), handler, surface)
        return token

    def off_event(self, token: int) -> None:
        self._handlers.pop(token, None)

    def get_screen_dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    def get_option(self, option_id: str) -> Any:
        return self.options.get(option_id)

    def set_option(self, option_id: str, value: Any) -> None:
        self.options[option_id] = value
        self.option_log.append((option_id, value))

    # -- Driving the host ------------------------------------------------

    def press(self, key: str, mode: str = "n") -> bool:
        """
        Press *key* on the focused surface.

        Returns:
            True if a handler was bound to the key
        """
        if self.focused is None:
            return False
        handler = self.surfaces[self.focused.id].keys.get((mode, key))
        if handler is None:
            return False
        handler()
        return True

    def emit(self, event: HostEvent, surface: Optional[SurfaceHandle] = None) -> None:
        """Deliver *event* to every matching handler."""
        payload = EventPayload(kind=HostEvent(event), surface=surface, width=self.width, height=self.height)
        # Handlers may unregister themselves while we iterate
        for kind, handler, target in list(self._handlers.values()):
            if kind != payload.kind:
                continue
            if target is not None and target != surface:
                continue
            handler(payload)

    def resize(self, width: int, height: int) -> None:
        """Change the screen size and announce it."""
        self.width = width
        self.height = height
        self.emit(HostEvent.SCREEN_RESIZED)

    # -- Inspection ------------------------------------------------------

    def content(self, name: str) -> List[str]:
        """Lines last written to the live surface called *name*."""
        return self.record(name).lines

    def record(self, name: str) -> SurfaceRecord:
        for record in self.surfaces.values():
            if record.handle.name == name and record.valid:
                return record
        raise KeyError(name)

    def live_surfaces(self) -> List[SurfaceRecord]:
        return [record for record in self.surfaces.values() if record.valid]

    def invalidate(self, surface: SurfaceHandle) -> None:
        """Kill *surface* behind the controller's back, without any event."""
        self._record(surface).valid = False

    def _record(self, surface: SurfaceHandle) -> SurfaceRecord:
        record = self.surfaces.get(surface.id)
        if record is None or not record.valid:
            raise StaleSurfaceError(surface)
        return record
