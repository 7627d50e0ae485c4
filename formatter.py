"""
Turns the free-text flag analysis into an ordered list of typed segments.
"""
import re
from typing import Any, Dict, List

from schemas import BulletItem, LabeledField, Paragraph, SectionHeader, Segment

# Whitespace and line terminators trimmed around a line, byte-order mark included
TRIM_CHARACTERS = (
    "\t\n\v\f\r "
    "\u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

# Emphasis, header and code markers; colons and dashes are content
DECORATION_PATTERN = re.compile(r"[*_#`]")
# ASCII digits only
SECTION_NUMBER_PATTERN = re.compile(r"^[0-9]+\.")
SECTION_PREFIX_PATTERN = re.compile(r"^[0-9]+\.[" + re.escape(TRIM_CHARACTERS) + "]*")
LIST_MARKER = "-"


def clean_line(line: str) -> str:
    """Strip markdown decoration and surrounding whitespace from one line."""
    return DECORATION_PATTERN.sub("", line).strip(TRIM_CHARACTERS)


def classify_line(clean: str) -> Segment:
    """
    Map a non-empty clean line to exactly one segment.

    Lines starting with "N." are section headers, "-" lines with a colon are
    labeled fields split on the first colon, other "-" lines are bullets and
    anything else is a paragraph. Indentation is not inspected, so nested
    lists come out flat.
    """
    if SECTION_NUMBER_PATTERN.match(clean):
        return SectionHeader(title=SECTION_PREFIX_PATTERN.sub("", clean, count=1))

    if clean.startswith(LIST_MARKER) and ":" in clean:
        label, value = clean[len(LIST_MARKER):].split(":", 1)
        return LabeledField(label=label.strip(TRIM_CHARACTERS), value=value.strip(TRIM_CHARACTERS))

    if clean.startswith(LIST_MARKER):
        return BulletItem(text=clean[len(LIST_MARKER):].strip(TRIM_CHARACTERS))

    return Paragraph(text=clean)


def format_analysis(text: str) -> List[Segment]:
    """Format an analysis text into segments, one per non-blank line, in order."""
    segments = []
    for line in text.split("\n"):
        clean = clean_line(line)
        if not clean:
            continue
        segments.append(classify_line(clean))
    return segments


def format_analysis_payload(text: str) -> List[Dict[str, Any]]:
    """Same as format_analysis, serialized for a JSON response."""
    return [segment.model_dump() for segment in format_analysis(text)]
