from .patch import PatchError, PatchRejectedError
from .store import FileNotFoundInStore

__all__ = ["PatchError", "PatchRejectedError", "FileNotFoundInStore"]
