# patchforge/workspace.py
"""
Pending-patch lifecycle for workspace files.

A file row carries committed `content` plus at most one `pending_patch`.
Accepting applies the patch and clears it; rejecting just clears it. Storage
is an injected `FileStore`; the engine itself never touches it.
"""
import contextlib
import logging
import threading
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional, Protocol, Tuple

from .apply.patch import apply_patch
from .errors.store import FileNotFoundInStore
from .models.result import PatchResult, PatchStatus

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceFile:
    """A file at one revision, with an optional proposed change."""

    id: str
    file_path: str
    content: str
    pending_patch: Optional[str] = None
    revision: int = 0


def apply_pending_patch(file: WorkspaceFile, **kwargs) -> Tuple[WorkspaceFile, PatchResult]:
    """
    Apply `file.pending_patch` to `file.content`.

    Returns the updated record (pending patch cleared) when any hunk applied,
    otherwise the original record unchanged. Keyword arguments are passed to
    `apply_patch`.
    """
    result = apply_patch(file.content, file.pending_patch, **kwargs)
    if result.changed:
        return replace(file, content=result.content, pending_patch=None), result
    return file, result


class FileStore(Protocol):
    def transaction(self) -> contextlib.AbstractContextManager: ...

    def get(self, file_id: str, revision: int) -> WorkspaceFile: ...

    def save(self, file: WorkspaceFile) -> None: ...


class InMemoryFileStore:
    """Dict-backed FileStore. Transactions hold a lock and roll back on error."""

    def __init__(self) -> None:
        self._rows: Dict[Tuple[str, int], WorkspaceFile] = {}
        self._lock = threading.RLock()
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("store is closed")

    @contextlib.contextmanager
    def transaction(self) -> Iterator[None]:
        self._check_open()
        with self._lock:
            snapshot = dict(self._rows)
            try:
                yield
            except BaseException:
                self._rows = snapshot
                raise

    def get(self, file_id: str, revision: int) -> WorkspaceFile:
        self._check_open()
        try:
            return self._rows[(file_id, revision)]
        except KeyError:
            raise FileNotFoundInStore(file_id, revision) from None

    def save(self, file: WorkspaceFile) -> None:
        self._check_open()
        with self._lock:
            self._rows[(file.id, file.revision)] = file

    def close(self) -> None:
        with self._lock:
            self._rows.clear()
            self._closed = True

    def __enter__(self) -> "InMemoryFileStore":
        return self

    def __exit__(self, *exc) -> None:  # type: ignore[no-untyped-def]
        self.close()


def accept_patch(store: FileStore, file_id: str, revision: int, **kwargs) -> PatchResult:
    """Fetch, apply and write back in one transaction. A rejected patch stays pending."""
    with store.transaction():
        file = store.get(file_id, revision)
        updated, result = apply_pending_patch(file, **kwargs)
        if updated is not file:
            store.save(updated)
    if result.status is PatchStatus.REJECTED:
        log.warning(f"Patch for {file_id}@{revision} rejected: {result.reason}")
    else:
        log.info(f"Patch for {file_id}@{revision}: {result.status.value}")
    return result


def reject_patch(store: FileStore, file_id: str, revision: int) -> WorkspaceFile:
    """Discard the pending patch, leaving content untouched."""
    with store.transaction():
        file = store.get(file_id, revision)
        if file.pending_patch is None:
            return file
        updated = replace(file, pending_patch=None)
        store.save(updated)
    log.info(f"Discarded pending patch for {file_id}@{revision}")
    return updated
