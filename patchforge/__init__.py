from .apply import (
    SimilarityScorer,
    apply_patch,
    parse_patch,
    sequence_similarity,
    token_overlap_similarity,
)
from .errors import FileNotFoundInStore, PatchError, PatchRejectedError
from .models import Confidence, HunkReport, Outcome, PatchResult, PatchStatus
from .options import PatchOptions
from .utils.text import cleanup_patch_text
from .workspace import (
    FileStore,
    InMemoryFileStore,
    WorkspaceFile,
    accept_patch,
    apply_pending_patch,
    reject_patch,
)

__all__ = [
    "apply_patch",
    "parse_patch",
    "apply_pending_patch",
    "accept_patch",
    "reject_patch",
    "cleanup_patch_text",
    "SimilarityScorer",
    "sequence_similarity",
    "token_overlap_similarity",
    "PatchOptions",
    "PatchResult",
    "PatchStatus",
    "HunkReport",
    "Outcome",
    "Confidence",
    "WorkspaceFile",
    "FileStore",
    "InMemoryFileStore",
    "PatchError",
    "PatchRejectedError",
    "FileNotFoundInStore",
]
