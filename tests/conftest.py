"""
conftest.py
-----------
Shared pytest fixtures for phlog tests.

Provides fixtures for:
- Entry file content samples
- Temporary journal repository trees (``<year>/<month>/<day>``)
- A MarkupContext with recognizable base URLs
"""
import pytest
from pathlib import Path
from typing import Callable

from phlog.markup.converter import MarkupContext


WIKI_URL = "http://wiki.example/doku.php"
MEDIA_URL = "https://media.example/kitchenlog/"
GOPHER_HOST = "gopher.example"


# ----- Helpers -----

def entry_text(
    begin: str,
    body: str = "Body text.\n",
    end: str = "None",
    topic: str = "Topic",
    appendix: str = "",
    media: tuple = (),
) -> str:
    """Build entry file content with the standard header layout."""
    lines = [
        "# generated for tests",
        f"BEGIN: {begin}",
        f"END: {end}",
        f"TOPIC: {topic}",
        f"APPENDIX: {appendix}",
    ]
    lines.extend(f"MEDIA: {name}" for name in media)
    return "\n".join(lines) + "\n\n" + body


def write_entry(root: Path, year: str, month: str, name: str, content: str) -> Path:
    """Create ``root/year/month/name`` with the given content."""
    path = root / year / month / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# ----- Content Fixtures -----

@pytest.fixture
def minimal_entry_content() -> str:
    """Entry with only a BEGIN header."""
    return "BEGIN: 2023-12-02\n\nJust a body.\n"


@pytest.fixture
def complete_entry_content() -> str:
    """Entry using every recognized header, comments and an unknown key."""
    return (
        "# Küchenlog entry\n"
        "BEGIN: 2023-12-02\n"
        "END: 2023-12-03\n"
        "TOPIC: Lötworkshop\n"
        "APPENDIX: Mitgebracht von Anna\n"
        "AUTHOR: ignored\n"
        "MEDIA: workshop.jpg,thumb.jpg\n"
        "MEDIA: board.png\n"
        "\n"
        "We soldered [[:projects:blinky|Blinky]] boards.\n"
    )


# ----- Tree Fixtures -----

@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing entry files into a fresh repository directory."""
    root = tmp_path / "kitchenlog"
    root.mkdir()

    def _make(*entries) -> Path:
        for year, month, name, content in entries:
            write_entry(root, year, month, name, content)
        return root

    return _make


@pytest.fixture
def markup() -> MarkupContext:
    """MarkupContext with test base URLs."""
    return MarkupContext(
        wiki_url=WIKI_URL,
        media_url=MEDIA_URL,
        gopher_host=GOPHER_HOST,
        gopher_port=70,
    )
