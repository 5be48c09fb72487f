"""
Block-level markdown parsing — segmentation and classification.

A report is split into blocks on blank lines, then each block is classified
into exactly one BlockKind. Classification is ordered and never fails:

    1. table        (pipe-led rows with a |---| separator below the header)
    2. heading      (### / ## / # — most specific marker first)
    3. blockquote   (every line starts with >)
    4. unordered    (* item / - item)
    5. ordered      (1. item)
    6. paragraph    (everything else)

Blocks are plain immutable values; rendering them (HTML or PDF) is done
elsewhere, so this module holds no markup at all.
"""

import re
from dataclasses import dataclass
from enum import Enum


class BlockKind(str, Enum):
    TABLE = "table"
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    UNORDERED_LIST = "unordered_list"
    ORDERED_LIST = "ordered_list"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Block:
    """A classified block.

    Which fields are populated depends on the kind:
    - TABLE: header, rows
    - HEADING: level (1-3), text
    - BLOCKQUOTE / PARAGRAPH: text
    - UNORDERED_LIST / ORDERED_LIST: items
    """
    kind: BlockKind
    raw: str
    text: str = ""
    level: int = 0
    items: tuple[str, ...] = ()
    header: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()


# Models often wrap the whole answer in ```markdown ... ```
_FENCE_PATTERN = re.compile(
    r"^```[ \t]*(?:markdown|md)?[ \t]*\n(?P<body>.*?)\n?```$",
    re.DOTALL | re.IGNORECASE,
)
# Two or more line breaks; whitespace-only lines count as blank
_BLOCK_SEPARATOR = re.compile(r"\n(?:[ \t]*\n)+")

# | --- | :---: | ---: |   (trailing pipe optional)
_SEPARATOR_ROW = re.compile(r"^\|(?:\s*:?-+:?\s*\|)*\s*:?-+:?\s*\|?$")

_HEADING_MARKERS = (("### ", 3), ("## ", 2), ("# ", 1))
_QUOTE_MARKER = re.compile(r"^\s*>\s?")
_UNORDERED_START = re.compile(r"^[*-]\s")
_UNORDERED_MARKER = re.compile(r"^\s*[-*]\s*")
_ORDERED_START = re.compile(r"^\d+\.\s")
_ORDERED_MARKER = re.compile(r"^\s*\d+\.\s*")


def strip_code_fence(text: str) -> str:
    """Remove a code fence that wraps the entire text, if there is one."""
    match = _FENCE_PATTERN.match(text.strip())
    if match:
        return match.group("body")
    return text


def segment_blocks(markdown: str) -> list[str]:
    """Split a report into trimmed, non-empty blocks in source order."""
    text = markdown.replace("\r\n", "\n").replace("\r", "\n")
    text = strip_code_fence(text).strip()
    if not text:
        return []
    blocks = (block.strip() for block in _BLOCK_SEPARATOR.split(text))
    return [block for block in blocks if block]


def split_table_row(row: str) -> list[str]:
    """Split a pipe row into trimmed cells.

    The empty fields produced by the outer pipes are dropped. Pipes inside
    cell content are not escaped; "| a|b |" is three cells.
    """
    cells = row.strip().split("|")
    if cells and cells[0].strip() == "":
        cells = cells[1:]
    if cells and cells[-1].strip() == "":
        cells = cells[:-1]
    return [cell.strip() for cell in cells]


def _parse_table(block: str):
    """Return (header, rows) for a valid table block, or None."""
    rows = [line.strip() for line in block.split("\n") if line.strip().startswith("|")]

    separator_index = next(
        (i for i, row in enumerate(rows) if _SEPARATOR_ROW.match(row)),
        -1,
    )
    if separator_index <= 0:
        return None

    header = tuple(split_table_row(rows[0]))
    body = []
    for row in rows[separator_index + 1:]:
        cells = split_table_row(row)
        if not cells or all(cell == "" for cell in cells):
            continue
        body.append(tuple(cells))

    return header, tuple(body)


def classify_block(block: str) -> Block:
    """Classify one trimmed block. Unrecognized input becomes a paragraph."""
    if block.startswith("|"):
        table = _parse_table(block)
        if table is not None:
            header, rows = table
            return Block(BlockKind.TABLE, raw=block, header=header, rows=rows)

    for marker, level in _HEADING_MARKERS:
        if block.startswith(marker):
            return Block(BlockKind.HEADING, raw=block, level=level,
                         text=block[len(marker):])

    lines = block.split("\n")

    if all(line.lstrip().startswith(">") for line in lines):
        quote = " ".join(_QUOTE_MARKER.sub("", line) for line in lines)
        return Block(BlockKind.BLOCKQUOTE, raw=block, text=quote)

    if _UNORDERED_START.match(block):
        items = tuple(_UNORDERED_MARKER.sub("", line, count=1) for line in lines)
        return Block(BlockKind.UNORDERED_LIST, raw=block, items=items)

    if _ORDERED_START.match(block):
        items = tuple(_ORDERED_MARKER.sub("", line, count=1) for line in lines)
        return Block(BlockKind.ORDERED_LIST, raw=block, items=items)

    return Block(BlockKind.PARAGRAPH, raw=block, text=block)


def parse_blocks(markdown: str) -> list[Block]:
    """Segment and classify a whole report."""
    return [classify_block(block) for block in segment_blocks(markdown)]
