"""Markdown outline extraction and tree assembly.

Headings are pulled out of a document with ``markdown-it-py``; their
inline tokens become the node's inline content (text, links, images).
The flat heading list is then nested by heading level.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from markdown_it import MarkdownIt

from mindgraph.model import ImageRule, LinkRule, Node, TextRule

if TYPE_CHECKING:
    from markdown_it.token import Token

    from mindgraph.model import Rule


@dataclass(frozen=True)
class Heading:
    """One heading of a document.

    Attributes:
        depth: Heading level, 1-6
        line: 0-based source line of the heading
        name: Raw heading text
        rules: Inline content items, or None if the heading has none
    """

    depth: int
    line: int
    name: str
    rules: list[Rule] | None = None


def parse_inline(children: list[Token]) -> list[Rule]:
    """Convert inline tokens into inline content items.

    ``link_open`` consumes the token after it as the link's text. Tokens
    other than text, links and images are dropped.
    """
    rules: list[Rule] = []
    i = 0
    while i < len(children):
        token = children[i]
        if token.type == "image":
            rules.append(ImageRule(src=str(token.attrGet("src") or "")))
        elif token.type == "link_open":
            content = children[i + 1].content if i + 1 < len(children) else ""
            rules.append(LinkRule(href=str(token.attrGet("href") or ""), content=content))
            i += 1
        elif token.type == "text":
            rules.append(TextRule(content=token.content))
        i += 1
    return rules


def extract_headings(text: str, parser: MarkdownIt | None = None) -> list[Heading]:
    """Return the headings of a Markdown document in order."""
    md = parser or MarkdownIt("commonmark")
    tokens = md.parse(text)
    headings: list[Heading] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.type == "heading_open" and i + 1 < len(tokens):
            inline = tokens[i + 1]
            headings.append(
                Heading(
                    depth=int(token.tag[1:]),
                    line=token.map[0] if token.map else 0,
                    name=inline.content,
                    rules=parse_inline(inline.children) if inline.children else None,
                )
            )
            i += 1
        i += 1
    return headings


def _node(heading: Heading) -> Node:
    return Node(name=heading.name, rules=list(heading.rules or []), line=heading.line)


def build_tree(headings: Iterable[Heading], title: str = "") -> Node:
    """Nest headings into a tree by level.

    A document with exactly one top-level heading, appearing first, uses it
    as the root. Otherwise a synthetic root named ``title`` holds the
    top-level headings. Skipped levels attach to the nearest shallower
    heading.
    """
    headings = list(headings)
    synthetic = Node(name=title, rules=[TextRule(title)] if title else [])
    if not headings:
        return synthetic

    top = min(h.depth for h in headings)
    single_root = headings[0].depth == top and sum(1 for h in headings if h.depth == top) == 1
    if single_root:
        root = _node(headings[0])
        stack: list[tuple[int, Node]] = [(top, root)]
        rest = headings[1:]
    else:
        root = synthetic
        stack = [(top - 1, root)]
        rest = headings

    for heading in rest:
        node = _node(heading)
        while stack[-1][0] >= heading.depth:
            stack.pop()
        stack[-1][1].children.append(node)
        stack.append((heading.depth, node))

    _assign_depths(root, 0)
    return root


def _assign_depths(node: Node, depth: int) -> None:
    node.depth = depth
    for child in node.children:
        _assign_depths(child, depth + 1)


def parse_markdown(text: str, title: str = "") -> Node:
    """Extract headings from ``text`` and assemble them into a tree."""
    return build_tree(extract_headings(text), title=title)
