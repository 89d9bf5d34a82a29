from .patch import PatchError


class FileNotFoundInStore(PatchError):
    """No file row exists for the requested id and revision."""

    def __init__(self, file_id: str, revision: int):
        self.file_id = file_id
        self.revision = revision
        super().__init__(f"file {file_id!r} not found at revision {revision}")
