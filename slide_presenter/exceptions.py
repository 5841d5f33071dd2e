"""
Exceptions raised by the slide presenter.
"""


class PresenterError(Exception):
    """Base class for all slide presenter errors."""


class ConfigError(PresenterError):
    """Invalid presenter configuration."""


class SessionStateError(PresenterError):
    """A lifecycle operation was issued in the wrong session phase."""


class StaleSurfaceError(PresenterError):
    """
    A surface handle no longer refers to a live host surface.

    Hosts raise this from geometry and content operations; the controller
    recovers by skipping the surface.
    """

    def __init__(self, handle, message: str = ""):
        self.handle = handle
        super().__init__(message or f"Surface {handle!r} is no longer valid")
