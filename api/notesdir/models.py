from __future__ import annotations

from pydantic import BaseModel
from typing import Optional, List


class NoteWrite(BaseModel):
    path: str
    content: str

class NoteContent(BaseModel):
    content: str

class WriteResult(BaseModel):
    success: bool = True

class ErrorOut(BaseModel):
    detail: str
    code: str

class TreeNode(BaseModel):
    id: str
    name: str
    children: Optional[List[TreeNode]] = None


TreeNode.model_rebuild()
