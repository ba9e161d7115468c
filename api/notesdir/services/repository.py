import os
import logging
import tempfile

from ..errors import InvalidPath, NotFound, StorageError
from ..models import TreeNode
from ..utils import normalize_note_id, is_absolute_id
from .tree import list_tree

logger = logging.getLogger("notesdir.notes")


class NoteRepository:
    """
    notes ディレクトリ配下のノートを読み書きする
    ファイルシステムそのものがストア。キャッシュもロックも持たない
    """

    def __init__(self, root, atomic_write: bool = False):
        self.root = os.path.abspath(root)
        self.atomic_write = atomic_write

    # ------------------------------------------------------------
    # パス解決
    # ------------------------------------------------------------

    def resolve(self, note_id: str) -> str:
        """ノートIDを絶対パスに変換 (ルート外は InvalidPath)"""

        if not note_id or not note_id.strip():
            raise InvalidPath("Path must not be empty")
        if "\x00" in note_id:
            raise InvalidPath("Path must not contain NUL")
        if is_absolute_id(note_id):
            raise InvalidPath("Path must be relative to the notes root")

        normalized = normalize_note_id(note_id)
        full_path = os.path.normpath(os.path.join(self.root, normalized))

        # ルート自身とルート外は拒否
        if full_path == self.root or os.path.commonpath([self.root, full_path]) != self.root:
            logger.warning(f"🚫 Rejected path outside notes root: {note_id!r}")
            raise InvalidPath(f"Path escapes the notes root: {note_id}")

        # シンボリックリンクを辿った実体もルート内であること
        real_root = os.path.realpath(self.root)
        real_path = os.path.realpath(full_path)
        if real_path == real_root or os.path.commonpath([real_root, real_path]) != real_root:
            logger.warning(f"🚫 Rejected path linked outside notes root: {note_id!r}")
            raise InvalidPath(f"Path escapes the notes root: {note_id}")

        return full_path

    # ------------------------------------------------------------
    # 操作
    # ------------------------------------------------------------

    def list_tree(self) -> list[TreeNode]:
        return list_tree(self.root)

    def read(self, note_id: str) -> str:
        path = self.resolve(note_id)

        try:
            with open(path, encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            # 存在しない / ディレクトリ / 壊れたリンク / 権限なし
            raise NotFound(f"Note not found: {note_id}") from e

    def write(self, note_id: str, content: str) -> None:
        path = self.resolve(note_id)
        directory = os.path.dirname(path)

        try:
            os.makedirs(directory, exist_ok=True)
            if self.atomic_write:
                self._write_atomic(path, content)
            else:
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(content)
        except OSError as e:
            logger.error(f"❌ Failed to write {note_id}: {e}")
            raise StorageError(f"Failed to write note: {note_id}") from e

        logger.info(f"📝 Saved note: {note_id}")

    def delete(self, note_id: str) -> None:
        path = self.resolve(note_id)

        # ディレクトリは再帰削除しない
        if os.path.isdir(path) and not os.path.islink(path):
            raise NotFound(f"Note not found: {note_id}")

        try:
            os.unlink(path)
        except OSError as e:
            raise NotFound(f"Note not found: {note_id}") from e

        logger.info(f"🗑️ Deleted note: {note_id}")

    # ------------------------------------------------------------

    def _write_atomic(self, path: str, content: str) -> None:
        """同じディレクトリの一時ファイルに書いてから置き換える"""
        fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path), prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
