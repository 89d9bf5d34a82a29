from .header import interpret_header, parse_header_line, sort_hunks
from .indent import infer_indentation, resolve_content
from .locate import locate_hunk
from .parse import extract_new_file_content, parse_patch
from .patch import apply_patch
from .similarity import SimilarityScorer, sequence_similarity, token_overlap_similarity
from .splice import apply_hunk

__all__ = [
    "apply_patch",
    "apply_hunk",
    "extract_new_file_content",
    "infer_indentation",
    "interpret_header",
    "locate_hunk",
    "parse_header_line",
    "parse_patch",
    "resolve_content",
    "sort_hunks",
    "SimilarityScorer",
    "sequence_similarity",
    "token_overlap_similarity",
]
