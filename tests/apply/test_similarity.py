import pytest

from patchforge.apply.similarity import sequence_similarity, token_overlap_similarity


def test_identical_and_empty():
    assert token_overlap_similarity("replicas: 3", "replicas: 3") == 1.0
    assert token_overlap_similarity("", "") == 1.0
    assert token_overlap_similarity("", "x") == 0.0
    assert token_overlap_similarity("x", "") == 0.0


def test_whitespace_insensitive_equality():
    assert token_overlap_similarity("foo: bar", "foo:bar") == 0.9
    assert token_overlap_similarity("  name: web", "name: web") == 0.9


def test_containment():
    assert token_overlap_similarity("image: nginx", "image: nginx:1.25") == 0.8
    assert token_overlap_similarity("  tag: latest  # pinned", "tag: latest") == 0.8


def test_token_overlap_ratio():
    assert token_overlap_similarity("alpha beta gamma", "alpha beta delta") == pytest.approx(2 / 3)


def test_short_tokens_are_ignored():
    assert token_overlap_similarity("a", "b") == 0.0
    # only 'name:' (len >= 2) is shared; 'x' and 'y' don't count
    assert token_overlap_similarity("name: x", "name: y") == 1.0


def test_sequence_similarity():
    assert sequence_similarity("abc", "abc") == 1.0
    assert sequence_similarity("  abc", "abc") == 1.0
    assert sequence_similarity("abcd", "abce") == pytest.approx(0.75)
