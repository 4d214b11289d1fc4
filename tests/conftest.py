import subprocess
from pathlib import Path
import pytest


@pytest.fixture
def home(fs, monkeypatch):
    """A fake home directory with no $EDITOR or $PAGER set."""
    monkeypatch.delenv('EDITOR', raising=False)
    monkeypatch.delenv('PAGER', raising=False)
    monkeypatch.delenv('NOTEBOOK_LOG_LEVEL', raising=False)
    path = Path('~').expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def run(mocker):
    """Replaces subprocess.run so no real editor, pager or grep is started.

    By default every program exits with status 0 and does nothing; set ``run.side_effect`` to simulate more.
    """
    return mocker.patch('subprocess.run', side_effect=lambda args, **kwargs: subprocess.CompletedProcess(args, 0))

