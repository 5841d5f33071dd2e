import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import slide_presenter` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from slide_presenter.hosts.headless import HeadlessHost  # noqa: E402


@pytest.fixture
def host():
    """An 80x24 in-memory host."""
    return HeadlessHost(width=80, height=24)


@pytest.fixture
def deck_lines():
    return [
        "# Intro",
        "Welcome",
        "",
        "# Middle",
        "- one",
        "- two",
        "# End",
        "Thanks",
    ]
