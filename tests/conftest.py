"""Shared pytest fixtures for KATRIN tests."""

from pathlib import Path

import pytest

SAMPLE_SCRIPT = """\
Assets { forest rain theme }
background forest
play theme
say "Welcome to the forest."
wait 1500
call give_item(player, umbrella)
load_script "chapter2.kat"
end
"""


@pytest.fixture
def sample_script() -> str:
    """Return a script using every instruction kind."""
    return SAMPLE_SCRIPT


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a temporary KATRIN project with a manifest and two scripts."""
    scripts = tmp_path / "scripts"
    (scripts / "chapters").mkdir(parents=True)
    (scripts / "main.kat").write_text(SAMPLE_SCRIPT, encoding="utf-8")
    (scripts / "chapters" / "chapter2.kat").write_text(
        'background forest\nsay "Chapter two."\nend\n', encoding="utf-8"
    )
    (scripts / "notes.txt").write_text("not a script", encoding="utf-8")

    (tmp_path / "katrin.toml").write_text(
        """
[project]
name = "forest_tale"
entry = "scripts/main.kat"

[scripts]
paths = ["scripts/"]
""",
        encoding="utf-8",
    )
    return tmp_path
