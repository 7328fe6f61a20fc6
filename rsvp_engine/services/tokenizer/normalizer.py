"""
Text normalization for consistent tokenization.

Key behavior:
- Normalizes whitespace (preserving paragraph boundaries)
- Best-effort PDF cleanup
- Markdown -> best-effort plain text (strip formatting; keep readable content)
"""
import re
from typing import List, Literal

SourceTypeLiteral = Literal["paste", "md", "pdf"]

_SPACE_RUN_RE = re.compile(r" +")

_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_HEADING_RE = re.compile(r"^\s*#{1,6}\s+(.+?)\s*#*\s*$")
_LIST_RE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+(.+?)\s*$")
_HR_RE = re.compile(r"^\s*(?:-{3,}|\*{3,}|_{3,})\s*$")
_BLOCKQUOTE_RE = re.compile(r"^\s*>\s?")

_INLINE_RULES = [
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), r"\1"),  # images -> alt text
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),  # links -> text
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"\b_([^_]+)_\b"), r"\1"),
    (re.compile(r"~~([^~]+)~~"), r"\1"),
    (re.compile(r"<[^>]+>"), ""),  # HTML tags
]


def normalize_text(raw_text: str, source_type: SourceTypeLiteral = "paste") -> str:
    """
    Normalize text for tokenization.

    Args:
        raw_text: The input text
        source_type: "paste", "md", or "pdf"

    Returns:
        Normalized text; paragraphs are separated by blank lines.
    """
    if not raw_text:
        return ""

    text = normalize_line_endings(raw_text)

    if source_type == "pdf":
        text = _normalize_pdf_text(text)
    elif source_type == "md":
        text = "\n\n".join(_markdown_to_blocks(text))

    return normalize_whitespace(text)


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and bare CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_whitespace(text: str) -> str:
    """
    Normalize whitespace in source text.

    Unifies line endings, converts tabs to single spaces, collapses runs
    of spaces and trims both ends. Newlines are kept so blank lines still
    mark paragraph boundaries.

    Example:
        >>> normalize_whitespace("  Hello\\t\\tworld.\\r\\n\\r\\nNext   one ")
        'Hello world.\\n\\nNext one'
    """
    text = normalize_line_endings(text)
    text = text.replace("\t", " ")
    text = _SPACE_RUN_RE.sub(" ", text)
    return text.strip()


def _normalize_pdf_text(text: str) -> str:
    """
    Handle common PDF extraction artifacts.

    - Joins hyphenated line breaks (e.g., "exam-\\nple" -> "example")
    - Joins lines that don't end with sentence punctuation (likely mid-sentence breaks)
    """
    text = re.sub(r"(\w)-\n(\w)", r"\1\2", text)

    joined_lines: List[str] = []
    buffer = ""

    for line in text.split("\n"):
        line = line.strip()
        if not line:
            if buffer:
                joined_lines.append(buffer)
                buffer = ""
            joined_lines.append("")  # Preserve paragraph break
            continue

        if buffer and buffer[-1] not in ".!?:":
            buffer += " " + line
        else:
            if buffer:
                joined_lines.append(buffer)
            buffer = line

    if buffer:
        joined_lines.append(buffer)

    return "\n".join(joined_lines)


def _markdown_to_blocks(text: str) -> List[str]:
    """
    Convert Markdown into best-effort plain-text blocks.

    Rules:
    - Strip inline formatting (emphasis, links, images, inline code markers)
    - Drop fenced code blocks entirely
    - Headings and list items become their own blocks
    """
    blocks: List[str] = []
    current_para: List[str] = []
    in_fenced_code = False

    def flush_paragraph() -> None:
        if current_para:
            clean = strip_markdown_inline(" ".join(current_para))
            if clean:
                blocks.append(clean)
            current_para.clear()

    for line in text.split("\n"):
        if _FENCE_RE.match(line):
            in_fenced_code = not in_fenced_code
            continue

        if in_fenced_code:
            continue

        if _HR_RE.match(line) or not line.strip():
            flush_paragraph()
            continue

        block_match = _HEADING_RE.match(line) or _LIST_RE.match(line)
        if block_match:
            flush_paragraph()
            item_text = strip_markdown_inline(block_match.group(1))
            if item_text:
                blocks.append(item_text)
            continue

        current_para.append(_BLOCKQUOTE_RE.sub("", line))

    flush_paragraph()
    return blocks


def strip_markdown_inline(text: str) -> str:
    """
    Best-effort Markdown inline cleanup.

    Example:
        >>> strip_markdown_inline("Read **this** [guide](http://x.io) now")
        'Read this guide now'
    """
    for pattern, replacement in _INLINE_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()
