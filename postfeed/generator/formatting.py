"""
Post formatting helpers.

Turns raw model output into the fields stored in the feed: title, hashtags
and a minimal HTML body (paragraphs plus bullet lists).
"""

import logging
import re
from typing import List, Optional

logger = logging.getLogger("postfeed")

DEFAULT_TITLE = "AI • UX • Daily Insight"
DEFAULT_HASHTAGS = ["ArtificialIntelligence", "UserExperience", "FutureOfWork"]
MAX_TITLE_LENGTH = 100
MAX_HASHTAGS = 7

_HASHTAG_RE = re.compile(r"#[A-Za-z0-9_]+")
_BULLET_RE = re.compile(r"^[-*•]")
_BULLET_PREFIX_RE = re.compile(r"^[-*•]\s?")
_HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"}


def title_from(line: str) -> str:
    """Strip heading/bullet markers from a line and cap it at 100 characters."""
    return re.sub(r"[#*-]", "", line).strip()[:MAX_TITLE_LENGTH]


def derive_title(text: str) -> str:
    """
    Derive a post title from the first non-blank line.

    Args:
        text: Generated post body

    Returns:
        str: Title, or the default title when the text is blank

    Example:
        >>> derive_title("\\n## Agents need handoffs\\nBody...")
        'Agents need handoffs'
    """
    first_line: Optional[str] = next((line for line in text.split("\n") if line.strip()), None)
    if first_line is None:
        logger.debug("[Format] No title line found, using default title")
    return title_from(first_line or DEFAULT_TITLE)


def derive_hashtags(text: str) -> List[str]:
    """
    Collect hashtags used in the text, in order of first appearance.

    The default tags are appended when missing and the result is capped at 7.
    """
    tags: List[str] = []
    for match in _HASHTAG_RE.findall(text):
        tag = match[1:]
        if tag not in tags:
            tags.append(tag)

    for base in DEFAULT_HASHTAGS:
        if base not in tags:
            tags.append(base)

    return tags[:MAX_HASHTAGS]


def escape_html(text: str) -> str:
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in text)


def to_html(markdown: str) -> str:
    """
    Minimal markdown to HTML conversion.

    Lines starting with -, * or • become list items inside
    ``<ul class="bullets">``; a blank line closes an open list; every other
    non-blank line becomes a paragraph.
    """
    out: List[str] = []
    in_list = False

    for line in (raw.strip() for raw in markdown.split("\n")):
        if _BULLET_RE.match(line):
            if not in_list:
                out.append('<ul class="bullets">')
                in_list = True
            out.append(f"<li>{escape_html(_BULLET_PREFIX_RE.sub('', line))}</li>")
        elif line == "":
            if in_list:
                out.append("</ul>")
                in_list = False
        else:
            out.append(f"<p>{escape_html(line)}</p>")

    if in_list:
        out.append("</ul>")

    return "\n".join(out)
