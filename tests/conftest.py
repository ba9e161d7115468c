import os
import tempfile

import pytest

# アプリの import 前に設定ファイルの場所を一時ディレクトリへ
_config_dir = tempfile.mkdtemp(prefix="notesdir-config-")
os.environ.setdefault("NOTES_CONFIG", os.path.join(_config_dir, "config.json"))
os.environ.setdefault("NOTES_DIR", os.path.join(_config_dir, "notes"))

from fastapi.testclient import TestClient

from notesdir.main import app
from notesdir.routers.notes import get_repository
from notesdir.services.repository import NoteRepository


@pytest.fixture
def notes_dir(tmp_path):
    root = tmp_path / "notes"
    root.mkdir()
    return root


@pytest.fixture
def repo(notes_dir):
    return NoteRepository(notes_dir)


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_repository] = lambda: repo
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
