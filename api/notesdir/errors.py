class NotesError(Exception):
    """ノート操作の基底例外"""

    status_code = 500
    code = "error"

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail or self.__class__.__name__


class NotFound(NotesError):
    status_code = 404
    code = "not_found"


class RootNotFound(NotFound):
    code = "root_not_found"


class InvalidPath(NotesError):
    status_code = 400
    code = "invalid_path"


class StorageError(NotesError):
    status_code = 500
    code = "storage_error"


# HTTP ステータス → 例外 (クライアント側で使用)
ERRORS_BY_STATUS = {
    400: InvalidPath,
    404: NotFound,
    500: StorageError,
}
