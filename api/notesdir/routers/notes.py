from fastapi import APIRouter, Depends, Response

from ..config import load_config, notes_root
from ..models import NoteWrite, NoteContent, WriteResult, ErrorOut, TreeNode
from ..services.repository import NoteRepository

router = APIRouter(prefix="/api/notes", tags=["notes"])

error_responses = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
}

config = load_config()


def get_repository() -> NoteRepository:
    """設定からリポジトリを作る (テストでは dependency_overrides で差し替え)"""
    notes_conf = config["notes"]
    return NoteRepository(
        notes_root(config),
        atomic_write=bool(notes_conf.get("atomic_write", False)),
    )


@router.get("", response_model=list[TreeNode], response_model_exclude_none=True, responses=error_responses)
def get_tree(repo: NoteRepository = Depends(get_repository)):
    return repo.list_tree()


@router.post("", response_model=WriteResult, responses=error_responses)
def save_note(note: NoteWrite, repo: NoteRepository = Depends(get_repository)):
    # 作成・上書き兼用
    repo.write(note.path, note.content)
    return {"success": True}


@router.get("/{note_path:path}", response_model=NoteContent, responses=error_responses)
def get_note(note_path: str, repo: NoteRepository = Depends(get_repository)):
    return {"content": repo.read(note_path)}


@router.delete("/{note_path:path}", status_code=204, responses=error_responses)
def delete_note(note_path: str, repo: NoteRepository = Depends(get_repository)):
    repo.delete(note_path)
    return Response(status_code=204)
