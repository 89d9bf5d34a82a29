# patchforge/options.py
from dataclasses import dataclass


@dataclass(frozen=True)
class PatchOptions:
    """Tunables for hunk location and indentation inference."""

    window: int = 15               # +/- lines scanned around the declared start
    max_context: int = 3           # old-side lines used as the location anchor
    fuzzy_threshold: float = 0.6   # best fuzzy score must exceed this
    run_line_threshold: float = 0.7
    run_bonus: float = 0.1         # >= 2 consecutive lines above run_line_threshold
    proximity_bonus: float = 0.1   # at distance 0, decays linearly to 0 at proximity_radius
    proximity_radius: int = 30
    max_fuzzy_lines: int = 20000   # larger files skip the fuzzy tier
    yaml_indent: str = "  "


DEFAULT_OPTIONS = PatchOptions()
