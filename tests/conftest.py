import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


PLAYER_DOC = """# Player
Represents a player entity.

## GetHealth
Returns the player's current health.
Parameters:
Returns: number
"""

GLOBALS_DOC = """## Sleep
Pauses execution.
Parameters:
- ms (number) - milliseconds to sleep
Returns: nil
"""


@pytest.fixture
def player_text():
    """Class document with one class and one method."""
    return PLAYER_DOC


@pytest.fixture
def globals_text():
    """Globals document with one function."""
    return GLOBALS_DOC


@pytest.fixture
def docs_dir(tmp_path):
    """Documentation tree with a globals file and nested class files."""
    root = tmp_path / "docs"
    (root / "classes").mkdir(parents=True)
    (root / "globals.md").write_text(GLOBALS_DOC, encoding="utf-8")
    (root / "classes" / "player.md").write_text(PLAYER_DOC, encoding="utf-8")
    (root / "classes" / "vector.md").write_text(
        "# Vector\n\n## Length\nVector length.\nReturns: number\n",
        encoding="utf-8",
    )
    return root
