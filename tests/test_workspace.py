"""
Pending-patch lifecycle: apply_pending_patch on records, accept/reject
against a FileStore, and InMemoryFileStore transaction semantics.
"""
import logging

import pytest

from patchforge import (
    FileNotFoundInStore,
    InMemoryFileStore,
    PatchStatus,
    WorkspaceFile,
    accept_patch,
    apply_pending_patch,
    reject_patch,
)

VALUES = "replicaCount: 1\nimage: nginx"
BUMP = "--- values.yaml\n+++ values.yaml\n@@ -1 +1 @@\n-replicaCount: 1\n+replicaCount: 3"


def _file(pending=BUMP, content=VALUES, revision=1):
    return WorkspaceFile(id="f1", file_path="values.yaml", content=content,
                         pending_patch=pending, revision=revision)


@pytest.fixture
def store():
    with InMemoryFileStore() as s:
        s.save(_file())
        yield s


# ---------------------------------------------------------------------------
# apply_pending_patch
# ---------------------------------------------------------------------------


def test_apply_pending_patch_without_patch_is_noop():
    f = _file(pending=None)
    updated, result = apply_pending_patch(f)
    assert updated is f
    assert result.status is PatchStatus.NOOP


def test_apply_pending_patch_updates_content_and_clears_patch():
    f = _file()
    updated, result = apply_pending_patch(f)
    assert result.status is PatchStatus.APPLIED
    assert updated.content == "replicaCount: 3\nimage: nginx"
    assert updated.pending_patch is None
    assert (updated.id, updated.file_path, updated.revision) == ("f1", "values.yaml", 1)
    # the input record is immutable and untouched
    assert f.pending_patch == BUMP


def test_apply_pending_patch_keeps_record_when_rejected():
    f = _file(pending="no hunks here")
    updated, result = apply_pending_patch(f)
    assert updated is f
    assert result.status is PatchStatus.REJECTED


def test_apply_pending_patch_forwards_options(caplog):
    with caplog.at_level(logging.DEBUG):
        apply_pending_patch(_file(), log=True)
    assert any(getattr(r, "patch_event", None) == "patch.finished" for r in caplog.records)


# ---------------------------------------------------------------------------
# accept / reject
# ---------------------------------------------------------------------------


def test_accept_patch_persists_result(store):
    result = accept_patch(store, "f1", 1)
    assert result.status is PatchStatus.APPLIED
    saved = store.get("f1", 1)
    assert saved.content == "replicaCount: 3\nimage: nginx"
    assert saved.pending_patch is None


def test_accept_rejected_patch_leaves_it_pending(store, caplog):
    store.save(_file(pending="nothing useful"))
    with caplog.at_level(logging.WARNING, logger="patchforge.workspace"):
        result = accept_patch(store, "f1", 1)
    assert result.status is PatchStatus.REJECTED
    assert store.get("f1", 1).pending_patch == "nothing useful"
    assert any("rejected" in r.getMessage() for r in caplog.records)


def test_accept_patch_only_touches_requested_revision(store):
    store.save(_file(revision=2, content="replicaCount: 1\nimage: redis"))
    accept_patch(store, "f1", 2)
    assert store.get("f1", 1).pending_patch == BUMP
    assert store.get("f1", 2).content == "replicaCount: 3\nimage: redis"


def test_reject_patch_clears_pending_patch(store):
    updated = reject_patch(store, "f1", 1)
    assert updated.pending_patch is None
    assert updated.content == VALUES
    assert store.get("f1", 1).pending_patch is None


def test_reject_without_pending_patch_returns_row(store):
    store.save(_file(pending=None))
    assert reject_patch(store, "f1", 1) == _file(pending=None)


def test_unknown_file_raises(store):
    with pytest.raises(FileNotFoundInStore) as exc:
        accept_patch(store, "missing", 1)
    assert exc.value.file_id == "missing"
    assert exc.value.revision == 1
    with pytest.raises(FileNotFoundInStore):
        reject_patch(store, "f1", 99)


# ---------------------------------------------------------------------------
# InMemoryFileStore
# ---------------------------------------------------------------------------


def test_transaction_rolls_back_on_error(store):
    with pytest.raises(ValueError):
        with store.transaction():
            store.save(_file(content="changed"))
            raise ValueError("abort")
    assert store.get("f1", 1).content == VALUES


def test_transaction_commits_on_success(store):
    with store.transaction():
        store.save(_file(content="changed"))
    assert store.get("f1", 1).content == "changed"


def test_closed_store_refuses_use():
    s = InMemoryFileStore()
    s.save(_file())
    s.close()
    with pytest.raises(RuntimeError, match="closed"):
        s.get("f1", 1)
    with pytest.raises(RuntimeError):
        s.save(_file())
    with pytest.raises(RuntimeError):
        with s.transaction():
            pass


def test_context_manager_closes_store():
    with InMemoryFileStore() as s:
        s.save(_file())
    with pytest.raises(RuntimeError):
        s.get("f1", 1)
