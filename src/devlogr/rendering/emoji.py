# topmark:header:start
#
#   project      : devlogr
#   file         : emoji.py
#   file_relpath : src/devlogr/rendering/emoji.py
#   license      : MIT
#   copyright    : (c) 2025 Neofork
#
# topmark:header:end

"""Emoji detection and stripping by Unicode code point.

The scanner walks a string one code point at a time. A code point inside one of
the `EMOJI_RANGES` starts a *run*; the run then swallows skin-tone modifiers,
variation selectors, zero-width joiners, keycap marks and further emoji code
points, so a multi-part sequence such as ``👨‍💻`` or ``👍🏽`` is removed as a
whole. Two sequences whose base is *not* in the emoji ranges are recognized
explicitly:

* regional-indicator pairs (flags), and
* keycaps: a digit, ``#`` or ``*`` followed by VS16 and the combining keycap mark.

Each removed run leaves at most one space behind so neighbouring words never
fuse, and the result is whitespace-normalized. Stripping is idempotent.

The text-presentation symbols devlogr itself uses as icons (``✓``, ``✗``, ``●``,
...) lie inside the Dingbats and Geometric Shapes blocks; they are kept unless
explicitly requested in emoji presentation with VS16.
"""

from __future__ import annotations

from typing import Final

EMOJI_RANGES: Final[tuple[tuple[int, int], ...]] = (
    (0x1F600, 0x1F64F),  # Emoticons
    (0x1F300, 0x1F5FF),  # Miscellaneous Symbols and Pictographs
    (0x1F680, 0x1F6FF),  # Transport and Map Symbols
    (0x1F700, 0x1F77F),  # Alchemical Symbols
    (0x1F780, 0x1F7FF),  # Geometric Shapes Extended
    (0x1F800, 0x1F8FF),  # Supplemental Arrows-C
    (0x1F900, 0x1F9FF),  # Supplemental Symbols and Pictographs
    (0x1FA00, 0x1FA6F),  # Chess Symbols
    (0x1FA70, 0x1FAFF),  # Symbols and Pictographs Extended-A
    (0x2600, 0x26FF),  # Miscellaneous Symbols
    (0x2700, 0x27BF),  # Dingbats
    (0x2300, 0x23FF),  # Miscellaneous Technical
    (0x2460, 0x24FF),  # Enclosed Alphanumerics
    (0x25A0, 0x25FF),  # Geometric Shapes
    (0x2B00, 0x2BFF),  # Miscellaneous Symbols and Arrows
    (0x3030, 0x3030),  # Wavy dash
    (0x303D, 0x303D),  # Part alternation mark
    (0x3200, 0x32FF),  # Enclosed CJK Letters and Months
    (0x1F200, 0x1F2FF),  # Enclosed Ideographic Supplement
    (0x1F1E6, 0x1F1FF),  # Regional indicators
    (0xE0020, 0xE007F),  # Tags
)

SKIN_TONE_MODIFIERS: Final[frozenset[int]] = frozenset(range(0x1F3FB, 0x1F400))
ZERO_WIDTH_JOINER: Final[int] = 0x200D
VARIATION_SELECTOR_TEXT: Final[int] = 0xFE0E
VARIATION_SELECTOR_EMOJI: Final[int] = 0xFE0F
KEYCAP_COMBINING_MARK: Final[int] = 0x20E3
REGIONAL_INDICATOR_FIRST: Final[int] = 0x1F1E6
REGIONAL_INDICATOR_LAST: Final[int] = 0x1F1FF

KEYCAP_BASES: Final[frozenset[int]] = frozenset(map(ord, "0123456789#*"))

# Icon glyphs rendered by themes and task renderers; text presentation unless VS16 follows.
ICON_CODE_POINTS: Final[frozenset[int]] = frozenset(map(ord, "✓✔✗✘✖●◯❯"))

_EXTENDERS: Final[frozenset[int]] = SKIN_TONE_MODIFIERS | {
    ZERO_WIDTH_JOINER,
    VARIATION_SELECTOR_TEXT,
    VARIATION_SELECTOR_EMOJI,
    KEYCAP_COMBINING_MARK,
}


def is_emoji_code_point(code_point: int) -> bool:
    """Return True if ``code_point`` lies in one of the emoji blocks."""
    return any(start <= code_point <= end for start, end in EMOJI_RANGES)


def is_regional_indicator(code_point: int) -> bool:
    """Return True for the regional-indicator letters used in flag pairs."""
    return REGIONAL_INDICATOR_FIRST <= code_point <= REGIONAL_INDICATOR_LAST


def _starts_run(points: list[int], index: int) -> bool:
    cp: int = points[index]
    if cp in ICON_CODE_POINTS:
        return index + 1 < len(points) and points[index + 1] == VARIATION_SELECTOR_EMOJI
    return is_emoji_code_point(cp)


def _continues_run(cp: int) -> bool:
    return cp in _EXTENDERS or (is_emoji_code_point(cp) and cp not in ICON_CODE_POINTS)


def _match_length(points: list[int], index: int) -> int:
    """Return how many code points starting at ``index`` form an emoji sequence (0 if none)."""
    cp: int = points[index]
    end: int = len(points)

    # Flag: two regional indicators
    if (
        is_regional_indicator(cp)
        and index + 1 < end
        and is_regional_indicator(points[index + 1])
    ):
        return 2

    # Keycap: base + VS16 + combining enclosing keycap
    if (
        cp in KEYCAP_BASES
        and index + 2 < end
        and points[index + 1] == VARIATION_SELECTOR_EMOJI
        and points[index + 2] == KEYCAP_COMBINING_MARK
    ):
        return 3

    if not _starts_run(points, index):
        return 0

    pos: int = index + 1
    while pos < end and _continues_run(points[pos]):
        pos += 1
    return pos - index


def find_emoji_spans(text: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` index pairs of every emoji sequence in ``text``.

    Adjacent sequences are reported as one span.

    Args:
        text (str): Text to scan.

    Returns:
        list[tuple[int, int]]: Half-open spans in code-point (``str``) indices.
    """
    points: list[int] = [ord(ch) for ch in text]
    spans: list[tuple[int, int]] = []
    index: int = 0
    while index < len(points):
        length: int = _match_length(points, index)
        if not length:
            index += 1
            continue
        start: int = index
        index += length
        # Merge directly following sequences (e.g. a flag after a keycap)
        while index < len(points):
            more: int = _match_length(points, index)
            if not more:
                break
            index += more
        spans.append((start, index))
    return spans


def contains_emoji(text: str) -> bool:
    """Return True if ``text`` holds at least one emoji sequence."""
    return bool(find_emoji_spans(text))


def strip_emoji(text: str) -> str:
    """Remove every emoji sequence and normalize whitespace.

    A removed sequence is replaced by a single space unless the output already
    ends in whitespace; runs of whitespace are then collapsed to one space and
    the ends trimmed.

    Args:
        text (str): Input text.

    Returns:
        str: Text without emoji. ``strip_emoji(strip_emoji(s)) == strip_emoji(s)``.
    """
    if not text:
        return text

    pieces: list[str] = []
    cursor: int = 0
    for start, end in find_emoji_spans(text):
        pieces.append(text[cursor:start])
        if pieces and pieces[-1] and not pieces[-1][-1].isspace():
            pieces.append(" ")
        cursor = end
    pieces.append(text[cursor:])

    return " ".join("".join(pieces).split())


def supports_emoji() -> bool:
    """Return the emoji capability of the active runtime context."""
    # Deferred: the context owns the renderers, which import this module
    from devlogr.context import get_context

    return get_context().profile.emoji_supported


def format_emoji(text: str, supported: bool | None = None) -> str:
    """Return ``text`` unchanged when emoji are supported, stripped otherwise.

    Args:
        text (str): Input text.
        supported (bool | None): Explicit capability; consults `supports_emoji` when None.

    Returns:
        str: Display-ready text.
    """
    if supported is None:
        supported = supports_emoji()
    return text if supported else strip_emoji(text)
