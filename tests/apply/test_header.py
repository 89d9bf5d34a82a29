import logging

from patchforge._logging import NoopLogger
from patchforge.apply.header import interpret_header, parse_header_line, reconstruct_header, sort_hunks
from patchforge.models import Hunk, HunkHeader, Outcome


# ---------------------------------------------------------------------------
# parse_header_line
# ---------------------------------------------------------------------------


def test_parse_full_header():
    h = parse_header_line("@@ -2,1 +2,1 @@")
    assert h == HunkHeader(old_start=2, old_length=1, new_start=2, new_length=1)
    assert h.declared_old_start == 1


def test_parse_header_lengths_default_to_one():
    h = parse_header_line("@@ -7 +9 @@")
    assert (h.old_start, h.old_length, h.new_start, h.new_length) == (7, 1, 9, 1)


def test_parse_header_with_section_text_and_loose_spacing():
    h = parse_header_line("  @@  -5,3  +5,8  @@ dependencies:")
    assert (h.old_start, h.old_length, h.new_start, h.new_length) == (5, 3, 5, 8)


def test_parse_header_for_new_file():
    h = parse_header_line("@@ -0,0 +1,1 @@")
    assert h.old_start == 0
    assert h.old_length == 0
    assert h.declared_old_start == 0


def test_zero_length_old_range_inserts_after_its_line():
    assert parse_header_line("@@ -3,0 +4,1 @@").declared_old_start == 3
    assert parse_header_line("@@ -1,0 +2,1 @@").declared_old_start == 1
    assert parse_header_line("@@ -1 +1,2 @@").declared_old_start == 0


def test_parse_header_rejects_garbage():
    assert parse_header_line("@@ invalid hunk header @@") is None
    assert parse_header_line("@@") is None
    assert parse_header_line(None) is None


# ---------------------------------------------------------------------------
# reconstruct_header / interpret_header
# ---------------------------------------------------------------------------


def test_reconstruct_counts_body_lines():
    h = reconstruct_header([" ctx", "-old", "+new", "+more"])
    assert h == HunkHeader(old_start=0, old_length=2, new_start=0, new_length=3)


def test_reconstruct_has_minimum_length_one():
    h = reconstruct_header(["+only added"])
    assert h.old_length == 1
    assert h.new_length == 1


def test_interpret_matched_header(engine_log):
    res = interpret_header("@@ -3,2 +3,2 @@", ["-a", "+b", " c"], engine_log)
    assert res.outcome is Outcome.MATCHED
    assert res.header.declared_old_start == 2
    assert res.reason == ""


def test_interpret_malformed_header_recovers_and_warns(engine_log, caplog):
    with caplog.at_level(logging.DEBUG):
        res = interpret_header("@@ invalid hunk header @@", ["+new content"], engine_log)
    assert res.outcome is Outcome.RECOVERED
    assert res.header.declared_old_start == 0
    assert "malformed hunk header" in res.reason
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings and warnings[0].patch_event == "hunk.header"


def test_interpret_missing_header():
    from patchforge._logging import NoopLogger

    res = interpret_header(None, [" a", "-b"], NoopLogger())
    assert res.outcome is Outcome.RECOVERED
    assert res.reason == "hunk has no header"
    assert res.header.old_length == 2


# ---------------------------------------------------------------------------
# sort_hunks
# ---------------------------------------------------------------------------


def test_sort_hunks_by_declared_start_keeps_ties_in_patch_order():
    raw = [
        Hunk("@@ -9 +9 @@", ["-x", "+y"]),
        Hunk(None, ["+first"], synthetic=True),
        Hunk("@@ -1 +1 @@", ["-a", "+b"]),
        Hunk("@@ garbage @@", ["+second"]),
    ]
    noop = NoopLogger()
    entries = sort_hunks([(h, interpret_header(h.header_line, h.lines, noop)) for h in raw])
    assert [h.lines[-1] for h, _ in entries] == ["+first", "+b", "+second", "+y"]
