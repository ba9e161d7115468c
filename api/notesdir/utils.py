import os
import re

# POSIX では "\" はファイル名の一部
_SEPARATORS = re.escape("/" + (os.altsep or "") + os.sep)


def normalize_note_id(note_id: str) -> str:
    """
    ノートIDの正規化
    区切り文字を / に統一し、空セグメントと "." を除去する
    ".." はここでは残す (ルート外かどうかは resolve 側で判定)
    """
    parts = re.split(f"[{_SEPARATORS}]+", note_id or "")
    return "/".join(p for p in parts if p not in ("", "."))


def is_absolute_id(note_id: str) -> bool:
    """絶対パス・ドライブ指定のチェック"""
    if not note_id:
        return False
    return note_id.startswith(("/", os.sep)) or os.path.isabs(note_id)


def relative_id(path: str, root: str) -> str:
    """ルートからの相対パスを / 区切りで返す"""
    return os.path.relpath(path, root).replace(os.sep, "/")
