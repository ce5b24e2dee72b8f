"""Shared pytest fixtures for cmdkit.

Every test starts with an empty context store and the default log sink, so
log history, error status and verbosity flags never leak between tests.
"""

import gzip
import io
import tarfile
import zipfile
from pathlib import Path
from typing import List

import pytest

from cmdkit.config import reset_default_config
from cmdkit.core import context, set_log_callback, stop_log_recording
from cmdkit.core.logging_utils import LogEntry


@pytest.fixture(autouse=True)
def clean_context(monkeypatch):
    for name in ('CMDKIT_VERBOSE', 'CMDKIT_DEBUG', 'CMDKIT_QUIET', 'CMDKIT_SIMULATE',
                 'CMDKIT_NOCOLOR', 'CMDKIT_COLUMNS', 'CMDKIT_LOG_DIR'):
        monkeypatch.delenv(name, raising=False)
    context.clear_all()
    reset_default_config()
    yield
    stop_log_recording()
    context.clear_all()
    reset_default_config()


@pytest.fixture
def captured_entries() -> List[LogEntry]:
    """Install a sink that collects entries instead of printing them."""
    entries: List[LogEntry] = []

    def _collect(entry: LogEntry) -> bool:
        entries.append(entry)
        return True

    set_log_callback(_collect)
    yield entries
    set_log_callback(None)


# =============================================================================
# Archive files
# =============================================================================


@pytest.fixture
def gzip_file(tmp_path: Path) -> Path:
    path = tmp_path / "payload.bin"
    path.write_bytes(gzip.compress(b"hello world"))
    return path


@pytest.fixture
def zip_file(tmp_path: Path) -> Path:
    path = tmp_path / "bundle.dat"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("readme.txt", "hello")
    return path


@pytest.fixture
def tar_file(tmp_path: Path) -> Path:
    path = tmp_path / "plain.archive"
    data = b"hello"
    with tarfile.open(path, "w") as archive:
        info = tarfile.TarInfo("readme.txt")
        info.size = len(data)
        archive.addfile(info, io.BytesIO(data))
    return path


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "notes.txt"
    path.write_text("just some text\n")
    return path
