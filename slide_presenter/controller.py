#!/usr/bin/env python3
"""
Presentation controller: ties the slide parser and layout engine to a host.

The controller owns the session state (the deck, the current slide and
the four managed surfaces) and is the only thing that changes it. Hosts
deliver key presses and events to its handler methods; each handler runs
to completion, so no locking is involved.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .config import PresenterConfig
from .exceptions import SessionStateError, StaleSurfaceError
from .host import EventPayload, Host, HostEvent, SurfaceHandle
from .layout_engine import LayoutEngine
from .models import Layout, OptionOverride, PresentationState, SessionPhase, Slide
from .slide_parser import SlideParser

logger = logging.getLogger(__name__)


def center_title(title: str, screen_width: int) -> str:
    """Left-pad *title* so it sits in the middle of the screen."""
    padding = max(0, (screen_width - len(title)) // 2)
    return " " * padding + title


def format_footer(current: int, total: int, source_label: str) -> str:
    return f" {current} / {total} | {source_label}"


class PresentationController:
    """
    Runs one presentation session on a host.

    Lifecycle: ``UNINITIALIZED`` -> :meth:`start` -> ``ACTIVE`` ->
    :meth:`quit` (or the body surface closing) -> ``CLOSED``. A controller
    is not reusable; create a new one per session.
    """

    def __init__(
        self,
        host: Host,
        *,
        config: Optional[PresenterConfig] = None,
        source_label: Optional[str] = None,
        parser: Optional[SlideParser] = None,
        layout_engine: Optional[LayoutEngine] = None,
    ):
        """
        Args:
            host: Host that materialises the surfaces
            config: Presenter settings, defaults when omitted
            source_label: Shown in the footer; falls back to ``config.source_label``
            parser: Slide parser, built from ``config.heading_marker`` when omitted
            layout_engine: Layout engine, a default one when omitted
        """
        self.host = host
        self.config = config or PresenterConfig()
        self.source_label = source_label if source_label is not None else (self.config.source_label or "")
        self.parser = parser or SlideParser(heading_marker=self.config.heading_marker)
        self.layout_engine = layout_engine or LayoutEngine()

        self.state = PresentationState()
        self.phase = SessionPhase.UNINITIALIZED
        self.surfaces: Dict[str, SurfaceHandle] = {}
        self.overrides: List[OptionOverride] = []
        self._event_tokens: list = []

    @property
    def is_active(self):
        return self.phase == SessionPhase.ACTIVE

    @property
    def current_slide(self) -> int:
        return self.state.current_slide

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, lines: Iterable[str]) -> PresentationState:
        """
        Parse *lines*, build the surfaces and show the first slide.

        Raises:
            SessionStateError: if the controller has already been started
        """
        if self.phase != SessionPhase.UNINITIALIZED:
            raise SessionStateError(f"Cannot start a presentation in phase {self.phase.value}")

        self.state = PresentationState(deck=self.parser.parse(lines), current_slide=1)
        try:
            self._apply_overrides()

            self.state.layout = self._compute_layout()
            for name, region in self.state.layout.items():
                self.surfaces[name] = self.host.create_surface(region, give_focus=(name == "body"), name=name)

            self.phase = SessionPhase.ACTIVE
            self._bind_keys()
            self.render_slide(self.state.current_slide)
            self._register_events()
        except Exception:
            # Undo whatever part of the start went through
            logger.error("Presentation failed to start, rolling back")
            self.phase = SessionPhase.CLOSED
            self._release()
            raise

        logger.info(f"Presentation started: {self.state.slide_count} slide(s), label {self.source_label!r}")
        return self.state

    def start_from_source(self, source) -> PresentationState:
        """Read *source* through the host and start presenting it."""
        return self.start(self.host.read_lines(source))

    def quit(self) -> bool:
        """
        End the session: restore display options, then release every surface.

        Safe to call any number of times; only the first call on an active
        session does anything.

        Returns:
            True if this call tore the session down
        """
        if self.phase != SessionPhase.ACTIVE:
            logger.debug(f"quit ignored in phase {self.phase.value}")
            return False

        # Flip first so events fired by closing surfaces find us closed
        self.phase = SessionPhase.CLOSED
        self._release()
        logger.info("Presentation closed")
        return True

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next(self) -> bool:
        """Advance one slide; stays put on the last slide."""
        if not self._check_active("next"):
            return False
        self.state.current_slide = min(self.state.current_slide + 1, self.state.slide_count)
        return self.render_slide(self.state.current_slide)

    def previous(self) -> bool:
        """Go back one slide; stays put on the first slide."""
        if not self._check_active("previous"):
            return False
        self.state.current_slide = max(self.state.current_slide - 1, 1)
        return self.render_slide(self.state.current_slide)

    def resize(self) -> bool:
        """
        Recompute the layout for the current screen size and redraw.

        Does nothing if the body surface is gone, which happens when a
        resize races the teardown.
        """
        if not self._check_active("resize"):
            return False

        body = self.surfaces.get("body")
        if body is None or not self.host.is_surface_valid(body):
            logger.debug("Resize skipped: body surface is not valid")
            return False

        self.state.layout = self._compute_layout()
        for name, surface in self.surfaces.items():
            try:
                self.host.set_surface_geometry(surface, self.state.layout[name])
            except StaleSurfaceError:
                logger.debug(f"Resize skipped stale surface {name}")

        return self.render_slide(self.state.current_slide)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_slide(self, idx: int) -> bool:
        """
        Make slide *idx* (1-based) current and write it into the header, body and footer surfaces.

        Out-of-range indexes are clamped to the first or last slide.
        """
        if not self._check_active("render"):
            return False

        idx = min(max(idx, 1), self.state.slide_count)
        self.state.current_slide = idx
        slide: Slide = self.state.deck.slide(idx)
        width, _ = self.host.get_screen_dimensions()

        self._write("header", [center_title(slide.title, width)])
        self._write("body", slide.body)
        self._write("footer", [format_footer(idx, self.state.slide_count, self.source_label)])

        logger.debug(f"Rendered slide {idx}/{self.state.slide_count}")
        return True

    # ------------------------------------------------------------------
    # Host event handlers
    # ------------------------------------------------------------------

    def on_screen_resized(self, event: EventPayload) -> None:
        self.resize()

    def on_surface_closed(self, event: EventPayload) -> None:
        self.quit()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_active(self, operation: str) -> bool:
        if self.phase == SessionPhase.ACTIVE:
            return True
        logger.warning(f"Ignoring {operation}: presentation is {self.phase.value}")
        return False

    def _compute_layout(self) -> Layout:
        width, height = self.host.get_screen_dimensions()
        return self.layout_engine.compute_regions(width, height)

    def _write(self, name: str, lines) -> None:
        surface = self.surfaces.get(name)
        if surface is None:
            return
        try:
            self.host.write_content(surface, list(lines))
        except StaleSurfaceError:
            logger.debug(f"Skipped write to stale surface {name}")

    def _apply_overrides(self) -> None:
        self.overrides = self.config.option_overrides()
        for override in self.overrides:
            override.original_value = self.host.get_option(override.option_id)
            self.host.set_option(override.option_id, override.present_value)
            logger.debug(f"Option {override.option_id}: {override.original_value!r} -> {override.present_value!r}")

    def _restore_overrides(self) -> None:
        overrides, self.overrides = self.overrides, []
        for override in overrides:
            try:
                self.host.set_option(override.option_id, override.original_value)
            except Exception:
                logger.warning(f"Could not restore option {override.option_id}", exc_info=True)

    def _release(self) -> None:
        """Restore display options, drop event handlers and close every surface."""
        self._restore_overrides()

        for token in self._event_tokens:
            self.host.off_event(token)
        self._event_tokens = []

        for name, surface in self.surfaces.items():
            try:
                self.host.close_surface(surface)
            except StaleSurfaceError:
                logger.debug(f"Surface {name} already gone")

        self.surfaces = {}
        self.state = PresentationState()

    def _bind_keys(self) -> None:
        body = self.surfaces["body"]
        keys = self.config.keys
        handlers = {"next": self.next, "previous": self.previous, "quit": self.quit}
        for action, key_names in keys.actions():
            for key in key_names:
                self.host.bind_key(body, keys.mode, key, handlers[action])

    def _register_events(self) -> None:
        body = self.surfaces["body"]
        self._event_tokens = [
            self.host.on_event(HostEvent.SURFACE_LEFT, self.on_surface_closed, surface=body),
            self.host.on_event(HostEvent.SURFACE_CLOSED, self.on_surface_closed, surface=body),
            self.host.on_event(HostEvent.SCREEN_RESIZED, self.on_screen_resized),
        ]
