import json

import pytest

from notesdir.client.api import NotesClient
from notesdir.client.state import ClientState
from notesdir.errors import InvalidPath, NotFound


@pytest.fixture
def state(tmp_path):
    return ClientState(path=str(tmp_path / "state.json"))


@pytest.fixture
def notes_client(client, state):
    return NotesClient(http=client, state=state)


def test_client_round_trip(notes_client, state):
    notes_client.write("a/b.txt", "hello")

    assert notes_client.read("a/b.txt") == "hello"
    [a] = notes_client.list_tree()
    assert a.id == "a"
    assert [c.id for c in a.children] == ["a/b.txt"]

    notes_client.delete("a/b.txt")
    with pytest.raises(NotFound):
        notes_client.read("a/b.txt")

    # write と delete で一覧の再取得を促す
    assert state.refresh_counter == 2


def test_client_maps_invalid_path(notes_client):
    with pytest.raises(InvalidPath):
        notes_client.write("../x.txt", "x")


def test_client_quotes_paths(notes_client):
    notes_client.write("with space/#1.txt", "ok")
    assert notes_client.read("with space/#1.txt") == "ok"


def test_state_defaults(state):
    assert state.refresh_counter == 0
    assert state.active_menu is None
    assert state.theme == "light"
    assert state.backend_url == "http://localhost:8000"


def test_toggle_theme_persists(state, tmp_path):
    assert state.toggle_theme() == "dark"

    reloaded = ClientState(path=state.path)
    assert reloaded.theme == "dark"

    reloaded.toggle_theme()
    assert ClientState(path=state.path).theme == "light"


def test_backend_url_persists(state):
    state.set_backend_url(" http://notes.local:9000/ ")

    assert state.backend_url == "http://notes.local:9000"
    assert ClientState(path=state.path).backend_url == "http://notes.local:9000"


def test_refresh_and_menu_are_not_persisted(state):
    state.trigger_refresh()
    state.set_active_menu("a/b.txt")
    state.toggle_theme()

    with open(state.path, encoding="utf-8") as f:
        assert json.load(f) == {"theme": "dark", "backend_url": "http://localhost:8000"}

    reloaded = ClientState(path=state.path)
    assert reloaded.refresh_counter == 0
    assert reloaded.active_menu is None


def test_subscribe_and_unsubscribe(state):
    seen = []
    unsubscribe = state.subscribe(lambda s: seen.append(s.refresh_counter))

    state.trigger_refresh()
    state.trigger_refresh()
    unsubscribe()
    state.trigger_refresh()

    assert seen == [0, 1, 2]


def test_corrupt_state_file_falls_back(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    state = ClientState(path=str(path))

    assert state.theme == "light"


def test_client_uses_state_backend_url(state):
    state.set_backend_url("http://example.invalid:1234")

    with NotesClient(state=state) as c:
        assert c.http.base_url.host == "example.invalid"
        assert c.http.base_url.port == 1234


def test_client_does_not_strip_absolute_ids(notes_client):
    with pytest.raises(InvalidPath):
        notes_client.read("/etc/passwd")
    with pytest.raises(InvalidPath):
        notes_client.delete("/etc/passwd")
