"""Single-file page block parser.

Splits a page source into its top-level blocks::

    <template>...</template>
    <script setup>...</script>
    <route lang="yaml">...</route>

Each block carries its tag name as ``type``, the raw text between the
opening and closing tags as ``content``, and its attributes.  Nested
tags with the same name as the enclosing block are balanced, and HTML
comments between blocks are skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from warren._errors import ExtractionError

# Opening tag at the current position: name, raw attributes, self-close slash
_OPEN_TAG_RE = re.compile(
    r"<([A-Za-z][\w-]*)"
    r"((?:\s+[^\s=>/]+(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s\"'>]+))?)*)"
    r"\s*(/?)>"
)

_ATTR_RE = re.compile(r"([^\s=>/]+)(?:\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s\"'>]+)))?")

_COMMENT_OPEN = "<!--"
_COMMENT_CLOSE = "-->"


@dataclass(frozen=True, slots=True)
class Block:
    """A top-level block of a page source.

    Attributes:
        type: Tag name (``template``, ``script``, ``route``, ...).
        content: Raw text between the opening and closing tags.
        attrs: Attributes of the opening tag. Valueless attributes map
            to ``"true"``.

    """

    type: str
    content: str
    attrs: dict[str, str] = field(default_factory=dict)

    @property
    def lang(self) -> str | None:
        """Value of the ``lang`` attribute, if any."""
        return self.attrs.get("lang")


def parse_blocks(source: str) -> list[Block]:
    """Parse the top-level blocks of a page source.

    Raises:
        ExtractionError: On an unclosed block or comment.

    """
    blocks: list[Block] = []
    pos = 0
    length = len(source)

    while pos < length:
        lt = source.find("<", pos)
        if lt == -1:
            break

        if source.startswith(_COMMENT_OPEN, lt):
            end = source.find(_COMMENT_CLOSE, lt + len(_COMMENT_OPEN))
            if end == -1:
                msg = f"Unclosed comment at offset {lt}"
                raise ExtractionError(msg)
            pos = end + len(_COMMENT_CLOSE)
            continue

        match = _OPEN_TAG_RE.match(source, lt)
        if match is None:
            pos = lt + 1
            continue

        name, raw_attrs, self_closing = match.groups()
        attrs = _parse_attrs(raw_attrs)
        if self_closing:
            blocks.append(Block(type=name, content="", attrs=attrs))
            pos = match.end()
            continue

        close_start, close_end = _find_close(source, name, match.end())
        blocks.append(Block(type=name, content=source[match.end():close_start], attrs=attrs))
        pos = close_end

    return blocks


def find_block(blocks: list[Block], block_type: str) -> Block | None:
    """Return the first block of *block_type*, or None."""
    for block in blocks:
        if block.type == block_type:
            return block
    return None


def _parse_attrs(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(raw):
        key = m.group(1)
        value = next((v for v in m.group(2, 3, 4) if v is not None), "true")
        attrs[key] = value
    return attrs


def _find_close(source: str, name: str, start: int) -> tuple[int, int]:
    """Locate the closing tag matching an opening ``<name>`` ending at *start*."""
    tag_re = re.compile(rf"<(/?){re.escape(name)}(?=[\s/>])[^>]*>")
    depth = 1
    for m in tag_re.finditer(source, start):
        if m.group(1):
            depth -= 1
            if depth == 0:
                return m.start(), m.end()
        elif not m.group(0).endswith("/>"):
            depth += 1

    msg = f"Unclosed <{name}> block"
    raise ExtractionError(msg)
