from urllib.parse import quote
import logging

import httpx

from ..errors import ERRORS_BY_STATUS, NotesError
from ..models import TreeNode

logger = logging.getLogger("notesdir.client")


class NotesClient:
    """notes API の HTTP クライアント"""

    def __init__(self, base_url: str = "", http: httpx.Client = None, timeout: float = 10.0, state=None):
        self.state = state
        if http is None:
            if not base_url and state is not None:
                base_url = state.backend_url
            http = httpx.Client(base_url=base_url, timeout=httpx.Timeout(timeout))
        self.http = http

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ------------------------------------------------------------

    def list_tree(self) -> list[TreeNode]:
        response = self.http.get("/api/notes")
        self._raise_for_error(response)
        return [TreeNode.model_validate(item) for item in response.json()]

    def read(self, note_id: str) -> str:
        response = self.http.get(self._note_url(note_id))
        self._raise_for_error(response)
        return response.json()["content"]

    def write(self, note_id: str, content: str) -> None:
        response = self.http.post("/api/notes", json={"path": note_id, "content": content})
        self._raise_for_error(response)
        self._refresh()

    def delete(self, note_id: str) -> None:
        response = self.http.delete(self._note_url(note_id))
        self._raise_for_error(response)
        self._refresh()

    # ------------------------------------------------------------

    def _refresh(self):
        # 一覧キャッシュの無効化
        if self.state is not None:
            self.state.trigger_refresh()

    @staticmethod
    def _note_url(note_id: str) -> str:
        return "/api/notes/" + quote(note_id, safe="/")

    @staticmethod
    def _raise_for_error(response: httpx.Response):
        if response.is_success:
            return

        try:
            detail = response.json().get("detail", response.text)
        except ValueError:
            detail = response.text

        error_class = ERRORS_BY_STATUS.get(response.status_code, NotesError)
        logger.warning(f"{response.request.method} {response.request.url} -> {response.status_code}: {detail}")
        raise error_class(str(detail))
