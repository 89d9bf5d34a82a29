import re

_THINK_RE = re.compile(r"<think>.*?</think>", flags=re.DOTALL | re.MULTILINE)
_FENCE_RE = re.compile(
    r"\A\s*```[a-zA-Z0-9-]*[ \t]*\n(.*?)\n\s*```\s*\Z", flags=re.DOTALL
)


def cleanup_patch_text(content: str) -> str:
    """
    Removes common LLM artifacts around a patch: <think> blocks and a markdown
    fence wrapping the entire text. Line endings are normalized to LF. Leading
    spaces of the first line survive, since they mark a context line.
    """
    if not content:
        return ""

    content = _THINK_RE.sub("", normalize_eol(content))

    fence_match = _FENCE_RE.match(content)
    if fence_match:
        content = fence_match.group(1)

    return content.strip("\r\n")


def detect_eol(s: str) -> str:
    if "\r\n" in s:
        return "\r\n"
    if "\r" in s:
        return "\r"
    return "\n"


def normalize_eol(s: str) -> str:
    return s.replace("\r\n", "\n").replace("\r", "\n")
