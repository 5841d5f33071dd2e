"""
Terminal host built on curses.

Each surface is a curses pad the size of its region (border included);
pads are copied to the screen in stacking order and clipped to the
terminal, so a region hanging off the right edge simply loses its last
columns. Run it with :func:`curses.wrapper`::

    curses.wrapper(lambda stdscr: CursesHost(stdscr).run(controller, lines))
"""

import curses
import itertools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..exceptions import StaleSurfaceError
from ..host import EventHandler, EventPayload, Host, HostEvent, KeyHandler, SurfaceHandle
from ..models import BorderStyle, Region

logger = logging.getLogger(__name__)

ESCAPE = 27

# Key names that are not a single character or a curses KEY_* constant
_NAMED_KEYS = {
    "esc": ESCAPE,
    "escape": ESCAPE,
    "space": ord(" "),
    "enter": ord("\n"),
    "tab": ord("\t"),
}

_ROUNDED = {"tl": "╭", "tr": "╮", "bl": "╰", "br": "╯", "h": "─", "v": "│"}


def key_code(name: str) -> int:
    """
    Translate a configured key name into the code returned by ``getch``.

    Accepts a single character (``"n"``), a curses constant name
    (``"KEY_RIGHT"``) or one of ``esc``, ``space``, ``enter``, ``tab``.
    """
    if len(name) == 1:
        return ord(name)
    if name.lower() in _NAMED_KEYS:
        return _NAMED_KEYS[name.lower()]
    if name.startswith("KEY_") and hasattr(curses, name):
        return getattr(curses, name)
    raise ValueError(f"Unknown key name: {name!r}")


def clip_region(region: Region, screen_width: int, screen_height: int) -> Optional[Tuple[int, int, int, int]]:
    """
    Visible part of *region* on a screen of the given size.

    Returns:
        ``(top, left, bottom, right)`` screen coordinates (inclusive) of the
        region's outer rectangle, or None if nothing of it is on screen
    """
    top = max(0, region.row)
    left = max(0, region.col)
    bottom = min(screen_height - 1, region.row + region.outer_height - 1)
    right = min(screen_width - 1, region.col + region.outer_width - 1)
    if bottom < top or right < left:
        return None
    return top, left, bottom, right


@dataclass
class _Surface:
    handle: SurfaceHandle
    region: Region
    lines: List[str] = field(default_factory=list)
    keys: Dict[Tuple[str, int], KeyHandler] = field(default_factory=dict)
    pad: Any = None


class CursesHost(Host):
    """
    Presents surfaces in a curses terminal.

    Options:
        cmdheight: rows kept at the bottom of the terminal for a key hint
        cursor: cursor visibility passed to ``curses.curs_set``
    """

    def __init__(self, stdscr, hint: str = " n: next  p: previous  q: quit"):
        self.stdscr = stdscr
        self.hint = hint
        self.options: Dict[str, Any] = {"cmdheight": 1, "cursor": 1}
        self.focused: Optional[SurfaceHandle] = None
        self._surfaces: Dict[int, _Surface] = {}
        self._handlers: Dict[int, Tuple[HostEvent, EventHandler, Optional[SurfaceHandle]]] = {}
        self._ids = itertools.count(1)

    # -- Host contract ---------------------------------------------------

    def read_lines(self, source) -> List[str]:
        return Path(source).read_text(encoding="utf-8").splitlines()

    def create_surface(self, region: Region, give_focus: bool = False, name: str = "") -> SurfaceHandle:
        handle = SurfaceHandle(id=next(self._ids), name=name)
        surface = _Surface(handle=handle, region=region)
        surface.pad = self._new_pad(region)
        self._surfaces[handle.id] = surface
        if give_focus:
            self.focused = handle
        return handle

    def write_content(self, surface: SurfaceHandle, lines: Sequence[str]) -> None:
        self._get(surface).lines = list(lines)
        self.redraw()

    def set_surface_geometry(self, surface: SurfaceHandle, region: Region) -> None:
        target = self._get(surface)
        target.region = region
        target.pad = self._new_pad(region)

    def close_surface(self, surface: SurfaceHandle) -> None:
        if self._surfaces.pop(surface.id, None) is None:
            return
        if self.focused == surface:
            self.focused = None
        self.emit(HostEvent.SURFACE_CLOSED, surface=surface)
        self.redraw()

    def is_surface_valid(self, surface: SurfaceHandle) -> bool:
        return surface.id in self._surfaces

    def bind_key(self, surface: SurfaceHandle, mode: str, key: str, handler: KeyHandler) -> None:
        self._get(surface).keys[(mode, key_code(key))] = handler

    def on_event(self, event: HostEvent, handler: EventHandler, surface: Optional[SurfaceHandle] = None) -> int:
        token = next(self._ids)
        self._handlers[token] = (HostEvent(event), handler, surface)
        return token

    def off_event(self, token: int) -> None:
        self._handlers.pop(token, None)

    def get_screen_dimensions(self) -> Tuple[int, int]:
        rows, cols = self.stdscr.getmaxyx()
        return cols, max(1, rows - int(self.options["cmdheight"]))

    def get_option(self, option_id: str) -> Any:
        return self.options.get(option_id)

    def set_option(self, option_id: str, value: Any) -> None:
        self.options[option_id] = value
        if option_id == "cursor":
            try:
                curses.curs_set(int(value))
            except curses.error:
                logger.debug("Terminal does not support changing cursor visibility")

    # -- Event loop ------------------------------------------------------

    def run(self, controller, lines: Sequence[str]) -> None:
        """Start *controller* on *lines* and process keys until the focused surface closes."""
        self.stdscr.keypad(True)
        controller.start(lines)
        try:
            while self.focused is not None:
                self.redraw()
                self.handle_key(self.stdscr.getch())
        except KeyboardInterrupt:
            logger.info("Interrupted, closing presentation")
            if self.focused is not None:
                self.close_surface(self.focused)

    def handle_key(self, key: int, mode: str = "n") -> None:
        if key == curses.KEY_RESIZE:
            self.emit(HostEvent.SCREEN_RESIZED)
            return
        if self.focused is None:
            return
        handler = self._surfaces[self.focused.id].keys.get((mode, key))
        if handler is not None:
            handler()

    def emit(self, event: HostEvent, surface: Optional[SurfaceHandle] = None) -> None:
        width, height = self.get_screen_dimensions()
        payload = EventPayload(kind=HostEvent(event), surface=surface, width=width, height=height)
        for kind, handler, target in list(self._handlers.values()):
            if kind == payload.kind and (target is None or target == surface):
                handler(payload)

    # -- Drawing ---------------------------------------------------------

    def redraw(self) -> None:
        rows, cols = self.stdscr.getmaxyx()
        self.stdscr.erase()
        cmdheight = int(self.options["cmdheight"])
        if cmdheight > 0 and rows > 0:
            self._addstr(self.stdscr, rows - 1, 0, self.hint[:max(0, cols - 1)])
        self.stdscr.noutrefresh()

        screen_height = max(1, rows - cmdheight)
        ordered = sorted(self._surfaces.values(), key=lambda s: (s.region.z_index, s.handle.id))
        for surface in ordered:
            visible = clip_region(surface.region, cols, screen_height)
            if visible is None:
                continue
            self._paint(surface)
            top, left, bottom, right = visible
            try:
                surface.pad.noutrefresh(top - surface.region.row, left - surface.region.col, top, left, bottom, right)
            except curses.error:
                logger.debug(f"Could not refresh surface {surface.handle.name}")
        curses.doupdate()

    def _paint(self, surface: _Surface) -> None:
        pad, region = surface.pad, surface.region
        pad.erase()
        offset = 1 if region.has_border else 0
        if region.border == BorderStyle.ROUNDED:
            self._draw_rounded_border(pad, region)
        for i, line in enumerate(surface.lines[:region.height]):
            self._addstr(pad, i + offset, offset, line[:region.width])

    def _draw_rounded_border(self, pad, region: Region) -> None:
        inner = _ROUNDED["h"] * region.width
        last = region.outer_height - 1
        self._addstr(pad, 0, 0, _ROUNDED["tl"] + inner + _ROUNDED["tr"])
        for row in range(1, last):
            self._addstr(pad, row, 0, _ROUNDED["v"])
            self._addstr(pad, row, region.width + 1, _ROUNDED["v"])
        self._addstr(pad, last, 0, _ROUNDED["bl"] + inner + _ROUNDED["br"])

    @staticmethod
    def _addstr(window, y: int, x: int, text: str) -> None:
        try:
            window.addstr(y, x, text)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off the window
            pass

    @staticmethod
    def _new_pad(region: Region):
        return curses.newpad(region.outer_height, region.outer_width + 1)

    def _get(self, surface: SurfaceHandle) -> _Surface:
        try:
            return self._surfaces[surface.id]
        except KeyError:
            raise StaleSurfaceError(surface) from None
