import os
import logging

from ..errors import RootNotFound, StorageError
from ..models import TreeNode
from ..utils import relative_id

logger = logging.getLogger("notesdir.tree")


def list_tree(root) -> list[TreeNode]:
    """
    ルート配下のツリーを返す
    ルート自体はノードにしない。順序は scandir の読み出し順
    シンボリックリンクは辿らない (ディレクトリへのリンクも葉として返す)
    """
    root = os.path.abspath(root)
    if not os.path.isdir(root):
        raise RootNotFound(f"Notes root not found: {root}")

    try:
        return _walk(root, root)
    except OSError as e:
        # 走査中にルートが消えた場合
        if not os.path.isdir(root):
            raise RootNotFound(f"Notes root not found: {root}") from e
        logger.error(f"❌ Failed to list {root}: {e}")
        raise StorageError("Failed to list notes") from e


def _walk(directory: str, root: str) -> list[TreeNode]:

    nodes = []
    with os.scandir(directory) as it:
        for entry in it:
            # id は親ではなくルートからの相対パス
            node_id = relative_id(entry.path, root)

            if entry.is_dir(follow_symlinks=False):
                nodes.append(TreeNode(id=node_id, name=entry.name, children=_walk(entry.path, root)))
            else:
                nodes.append(TreeNode(id=node_id, name=entry.name))

    return nodes
