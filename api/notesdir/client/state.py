import os, json
import logging

logger = logging.getLogger("notesdir.client")

STATE_PATH = os.getenv("NOTES_CLIENT_STATE", os.path.expanduser("~/.notesdir/state.json"))

DEFAULT_BACKEND_URL = "http://localhost:8000"

THEMES = ("light", "dark")


class ClientState:
    """
    UI 側の状態
    theme と backend_url だけを永続化する (ブラウザの localStorage 相当)
    refresh_counter と active_menu はメモリのみ
    """

    def __init__(self, path=None):
        self.path = path or STATE_PATH
        self.refresh_counter = 0
        self.active_menu = None
        self.theme = "light"
        self.backend_url = DEFAULT_BACKEND_URL
        self._subscribers = []
        self.load()

    # ------------------------------------------------------------
    # 永続化
    # ------------------------------------------------------------

    def load(self):
        if not os.path.exists(self.path):
            return

        with open(self.path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError:
                logger.warning(f"⚠️ Ignoring unreadable client state: {self.path}")
                return

        if data.get("theme") in THEMES:
            self.theme = data["theme"]
        if data.get("backend_url"):
            self.backend_url = str(data["backend_url"]).rstrip("/")

    def save(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"theme": self.theme, "backend_url": self.backend_url}, f, indent=2)

    # ------------------------------------------------------------
    # 購読
    # ------------------------------------------------------------

    def subscribe(self, callback):
        """変更通知を登録。解除用の関数を返す"""
        self._subscribers.append(callback)
        callback(self)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self):
        for callback in list(self._subscribers):
            callback(self)

    # ------------------------------------------------------------
    # 変更
    # ------------------------------------------------------------

    def trigger_refresh(self):
        self.refresh_counter += 1
        self._notify()

    def set_active_menu(self, item_id):
        self.active_menu = item_id
        self._notify()

    def toggle_theme(self):
        self.theme = "dark" if self.theme == "light" else "light"
        self.save()
        self._notify()
        return self.theme

    def set_backend_url(self, url: str):
        self.backend_url = url.strip().rstrip("/")
        self.save()
        self._notify()
