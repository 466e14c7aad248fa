import pathlib

import pytest


@pytest.fixture
def inipath(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch):
    """A directory with a custom configuration file.

    This fixture changes the working directory to `tmp_path` so that the
    configuration search finds the custom file before any other.
    """
    path = tmp_path / 'physunits.ini'
    path.write_text(
        "[physunits]\n"
        "precision = 12\n"
        "model = relativistic\n"
    )
    monkeypatch.chdir(tmp_path)
    return path
