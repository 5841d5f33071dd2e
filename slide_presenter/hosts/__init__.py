"""Host implementations: an in-memory one and a curses terminal one."""

from .headless import HeadlessHost

__all__ = ['HeadlessHost']
