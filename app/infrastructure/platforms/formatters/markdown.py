"""Markdown subset renderer with per-surface substitution tables.

Chat surfaces only understand a sliver of markdown. Each pipeline builds one
``MarkdownRenderer`` from an immutable ``RendererOverrides`` table that says
how bold, italic, blockquotes, paragraphs, lists and links are written for
that surface. An empty table renders plain CommonMark HTML.

Usage:
    renderer = MarkdownRenderer(SLACK_MARKDOWN)
    renderer.render("**strong**, *highlight*")
    # '*strong*, `highlight`'
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.anchors import anchors_plugin

# <a href="URL">label</a> is collapsed to URL before parsing
ANCHOR_PATTERN = re.compile(r'<a href="(.+?)">.*?</a>', re.IGNORECASE)

LIST_TYPES = ("bullet_list", "ordered_list")


@dataclass(frozen=True)
class RendererOverrides:
    """Substitution rules for one chat surface.

    Templates are ``str.format`` patterns. ``{text}`` receives the rendered
    content of the construct, ``{href}`` the link target. A ``None`` rule
    keeps the engine's own HTML for that construct.

    Attributes:
        strong: Rule for ``**bold**``
        em: Rule for ``*italic*``
        blockquote: Rule for ``> quote``
        paragraph: Rule for paragraphs (``"{text}"`` drops the wrapper)
        list_item: Rule for each list item body
        link: Rule for links, both markdown and ``<a href>`` anchors
        smart_quotes: Replace straight quotes with typographic ones
        heading_anchors: Give headings slug ``id`` attributes
        list: Rebuild lists as numbered/dashed plain text lines
    """

    strong: Optional[str] = None
    em: Optional[str] = None
    blockquote: Optional[str] = None
    paragraph: Optional[str] = None
    list_item: Optional[str] = None
    link: Optional[str] = None
    smart_quotes: bool = True
    heading_anchors: bool = False
    list: bool = False

    @property
    def is_native(self) -> bool:
        """True when no construct is overridden."""
        rules = (
            self.strong,
            self.em,
            self.blockquote,
            self.paragraph,
            self.list_item,
            self.link,
        )
        return all(rule is None for rule in rules) and not self.list


SLACK_MARKDOWN = RendererOverrides(
    strong="*{text}*",
    em="`{text}`",
    blockquote="```{text}```",
    paragraph="{text}",
    list_item="\n{text}",
    link="{href}",
    list=True,
)

PLAIN_MARKDOWN = RendererOverrides(
    strong="'{text}'",
    em="'{text}'",
    blockquote="\n{text}",
    paragraph="{text}",
    list_item="\n{text}",
    list=True,
)

NATIVE_MARKDOWN = RendererOverrides(heading_anchors=True)


def rebuild_list(body: str, ordered: bool, start: int = 1) -> str:
    """Turn concatenated list item bodies into numbered or dashed lines.

    One leading newline is dropped, the rest is split on newlines and each
    line is prefixed with ``"{n}. "`` or ``"- "``.

    Example:
        >>> rebuild_list("\\nOne\\nTwo", ordered=True)
        '1. One\\n2. Two'
    """
    if body.startswith("\n"):
        body = body[1:]
    lines = []
    for index, item in enumerate(body.split("\n")):
        marker = f"{start + index}. " if ordered else "- "
        lines.append(marker + item)
    return "\n".join(lines)


class MarkdownRenderer:
    """Renders markdown text for one surface.

    The parser is configured once at construction; ``render`` keeps all
    per-call state in local variables so one instance can serve concurrent
    deliveries.
    """

    def __init__(self, overrides: RendererOverrides):
        self.overrides = overrides
        self._md = MarkdownIt(
            "commonmark",
            {"typographer": overrides.smart_quotes, "xhtmlOut": False},
        ).enable("table")
        if overrides.smart_quotes:
            self._md.enable("smartquotes")
        if overrides.heading_anchors:
            self._md.use(anchors_plugin, max_level=3)

    def render(self, text: Optional[str]) -> str:
        """Render ``text`` according to the override table.

        Malformed markdown is not detected; whatever the engine makes of it
        is returned.
        """
        if not text:
            return ""
        if self.overrides.is_native:
            return self._md.render(text)

        if self.overrides.link is not None:
            text = ANCHOR_PATTERN.sub(
                lambda m: self.overrides.link.format(href=m.group(1), text=m.group(1)),
                text,
            )

        env: Dict[str, Any] = {}
        tree = SyntaxTreeNode(self._md.parse(text, env))
        source_lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        return self._render_children(tree, source_lines, env)

    def _render_children(
        self, node: SyntaxTreeNode, source_lines: List[str], env: Dict[str, Any]
    ) -> str:
        return "".join(
            self._render_node(child, source_lines, env) for child in node.children
        )

    def _render_node(
        self, node: SyntaxTreeNode, source_lines: List[str], env: Dict[str, Any]
    ) -> str:
        rules = self.overrides
        node_type = node.type

        if node_type == "text":
            return node.content
        if node_type in ("softbreak", "hardbreak"):
            return "\n"
        if node_type == "inline":
            return self._render_children(node, source_lines, env)

        if node_type == "paragraph" and rules.paragraph is not None:
            inner = self._render_children(node, source_lines, env)
            previous = node.previous_sibling
            if previous is not None and previous.type == "paragraph":
                inner = "\n\n" + inner
            # The engine trims paragraph content, the source line still has it
            return rules.paragraph.format(text=inner + self._trailing_space(node, source_lines))

        if node_type == "strong" and rules.strong is not None:
            return rules.strong.format(text=self._render_children(node, source_lines, env))
        if node_type == "em" and rules.em is not None:
            return rules.em.format(text=self._render_children(node, source_lines, env))
        if node_type == "blockquote" and rules.blockquote is not None:
            return rules.blockquote.format(
                text=self._render_children(node, source_lines, env)
            )
        if node_type == "link" and rules.link is not None:
            return rules.link.format(
                href=node.attrs.get("href", ""),
                text=self._render_children(node, source_lines, env),
            )
        if node_type == "list_item" and rules.list_item is not None:
            return rules.list_item.format(
                text=self._render_children(node, source_lines, env)
            )
        if node_type in LIST_TYPES and rules.list:
            body = self._render_children(node, source_lines, env)
            start = int(node.attrs.get("start", 1))
            rebuilt = rebuild_list(body, node_type == "ordered_list", start)
            if node.previous_sibling is None and node.parent is not None and node.parent.type == "root":
                return rebuilt
            return "\n" + rebuilt

        if node.nester_tokens is not None:
            return self._render_native_container(node, source_lines, env)
        return self._md.renderer.render(node.to_tokens(), self._md.options, env)

    def _render_native_container(
        self, node: SyntaxTreeNode, source_lines: List[str], env: Dict[str, Any]
    ) -> str:
        tokens = [node.nester_tokens.opening, node.nester_tokens.closing]
        renderer = self._md.renderer
        return (
            renderer.renderToken(tokens, 0, self._md.options, env)
            + self._render_children(node, source_lines, env)
            + renderer.renderToken(tokens, 1, self._md.options, env)
        )

    @staticmethod
    def _trailing_space(node: SyntaxTreeNode, source_lines: List[str]) -> str:
        if not node.map:
            return ""
        last = node.map[1] - 1
        if last < 0 or last >= len(source_lines):
            return ""
        line = source_lines[last]
        return line[len(line.rstrip()):]
