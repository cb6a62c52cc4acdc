"""Tab expansion and width wrapping for a single logical line."""

from __future__ import annotations

from phosphor.format import Wrapping

# Secondary ("pretty") break characters for word wrapping. The break is
# placed after the character.
PRETTY_BREAKS = frozenset("-:=./\\~)|}]")

RECURSION_DEPTH = 100

DEFAULT_TAB_SIZE = 4


def wrap_tab_line(
    text: str | None,
    left: int,
    wrap: Wrapping,
    width: int,
    tab_size: int = DEFAULT_TAB_SIZE,
    start_x: int = 0,
) -> tuple[str, ...] | None:
    """Expand tabs in *text* and break it at the first width juncture.

    *left* is the cursor column where the text will be printed and
    *start_x* the column output starts from after a newline; tab stops are
    measured from ``left - start_x``. *width* is the space remaining on the
    current row.

    Returns ``None`` if the text is unchanged, a 1-tuple holding the
    tab-expanded text if no break was needed, or ``(fragment, remainder)``
    where *remainder* still needs printing on the following row(s).
    """
    if not text:
        return None

    left = max(left - start_x, 0)
    word = wrap is Wrapping.WORD

    chars = list(text)
    space_pos = 0
    alt_pos = 0
    modified = False
    pos = 0

    while pos < len(chars):
        c = chars[pos]

        if c == "\t":
            rem = tab_size - ((left + pos) % tab_size)
            chars[pos : pos + 1] = [" "] * rem
            c = " "
            modified = True

        if word:
            if c <= " ":
                space_pos = pos
            elif c in PRETTY_BREAKS and pos < width:
                alt_pos = pos + 1

        if pos == width:
            if space_pos:
                pos = space_pos
            elif alt_pos:
                pos = alt_pos

            fragment = "".join(chars[:pos])
            remainder = "".join(chars[pos:])
            if word:
                fragment = fragment.rstrip()
                remainder = remainder.lstrip()
            return (fragment, remainder)

        pos += 1

    if modified:
        return ("".join(chars),)
    return None


def wrap_line(
    text: str,
    width: int,
    wrap: Wrapping = Wrapping.WORD,
    tab_size: int = DEFAULT_TAB_SIZE,
) -> list[str]:
    """Wrap one logical line into physical rows of at most *width* columns.

    Every row after the first starts at column zero. If the depth limit is
    reached the remaining text is returned as the final row unwrapped.
    """
    if width <= 0:
        return [text]

    rows: list[str] = []
    line = text

    for _ in range(RECURSION_DEPTH):
        result = wrap_tab_line(line, 0, wrap, width, tab_size)
        if result is None:
            break
        line = result[0]
        if len(result) == 1:
            break
        rows.append(result[0])
        line = result[1]

    rows.append(line)
    return rows
