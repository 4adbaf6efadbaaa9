"""Markdown rendering pipeline for chat messages.

Hides the details of markdown parsing and raw-HTML sanitization.

Message text is untrusted. It is parsed with markdown-it-py using the
GFM-like preset (tables, strikethrough, autolinks) with raw HTML enabled,
then a core rule rewrites every raw HTML token:
- html_block: cleaned with nh3 down to its text, scriptable element
  contents dropped, and turned into a plain paragraph
- html_inline: allow-listed formatting tags become the equivalent
  markdown tokens, scriptable elements are dropped with their contents,
  any other tag is dropped and its text kept

The resulting token stream is rendered by Textual's Markdown widget,
which syntax-highlights fenced code blocks, and by SanitizedMarkdown
for rich console output.
"""

import html
import re
from functools import lru_cache

import nh3
from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token
from rich.markdown import Markdown

# Elements whose contents are dropped along with the tags
UNSAFE_CONTENT_TAGS = frozenset({
    "script",
    "style",
    "iframe",
    "object",
    "embed",
    "noscript",
    "template",
})

# Inline tags kept as formatting: tag -> markdown token name
INLINE_FORMATTING_TAGS = {
    "b": "strong",
    "strong": "strong",
    "i": "em",
    "em": "em",
    "s": "s",
    "del": "s",
    "strike": "s",
}

_MARKUP = {"strong": "**", "em": "*", "s": "~~"}

_TAG_RE = re.compile(r"^<\s*(/?)\s*([a-zA-Z][a-zA-Z0-9-]*)[^>]*?(/?)\s*>$", re.DOTALL)


def create_markdown_parser() -> MarkdownIt:
    """Create a parser with GFM extensions and HTML sanitization.

    Suitable as a Textual Markdown ``parser_factory``.
    """
    md = MarkdownIt("gfm-like", {"html": True, "linkify": True})
    md.enable(["table", "strikethrough", "linkify"])
    md.core.ruler.push("sanitize_html", sanitize_html)
    return md


@lru_cache(maxsize=1)
def _shared_parser() -> MarkdownIt:
    return create_markdown_parser()


def render_message(content: object) -> list[Token]:
    """Convert one message's raw text into a sanitized token stream.

    Pure and deterministic. Non-string content renders as empty.
    """
    text = content if isinstance(content, str) else ""
    return _shared_parser().parse(text)


def strip_markup(fragment: str) -> str:
    """Reduce an HTML fragment to its plain text.

    Every tag is removed; contents of scriptable elements are dropped.
    """
    cleaned = nh3.clean(
        fragment,
        tags=set(),
        clean_content_tags=set(UNSAFE_CONTENT_TAGS),
        attributes={},
    )
    return html.unescape(cleaned)


def sanitize_html(state: StateCore) -> None:
    """Core rule: replace raw HTML tokens with safe equivalents."""
    sanitized: list[Token] = []
    for token in state.tokens:
        if token.type == "html_block":
            sanitized.extend(_html_block_to_paragraph(token))
            continue
        if token.type == "inline" and token.children:
            token.children = _sanitize_inline(token.children)
            token.content = _inline_text(token.children)
        sanitized.append(token)
    state.tokens = sanitized


def _inline_text(children: list[Token]) -> str:
    # The parent's source text still holds the raw markup
    parts = []
    for child in children:
        if child.type in ("text", "code_inline"):
            parts.append(child.content)
        elif child.type in ("hardbreak", "softbreak"):
            parts.append("\n")
    return "".join(parts)


def _html_block_to_paragraph(token: Token) -> list[Token]:
    text = strip_markup(token.content).strip()
    if not text:
        return []

    level = token.level
    paragraph_open = Token("paragraph_open", "p", 1, map=token.map, level=level, block=True)
    inline = Token(
        "inline", "", 0,
        map=token.map,
        level=level + 1,
        content=text,
        block=True,
        children=[Token("text", "", 0, content=text)],
    )
    paragraph_close = Token("paragraph_close", "p", -1, level=level, block=True)
    return [paragraph_open, inline, paragraph_close]


def _sanitize_inline(children: list[Token]) -> list[Token]:
    result: list[Token] = []
    open_stack: list[str] = []
    skipping: str | None = None

    for child in children:
        if child.type != "html_inline":
            if skipping is None:
                result.append(child)
            continue

        match = _TAG_RE.match(child.content.strip())
        if match is None:
            # Comments, processing instructions, declarations
            continue

        closing = match.group(1) == "/"
        name = match.group(2).lower()
        self_closing = match.group(3) == "/"

        if skipping is not None:
            if closing and name == skipping:
                skipping = None
            continue

        if name in UNSAFE_CONTENT_TAGS:
            if not closing and not self_closing:
                skipping = name
            continue

        if name == "br" and not closing:
            result.append(Token("hardbreak", "br", 0))
            continue

        if name not in INLINE_FORMATTING_TAGS or self_closing:
            continue

        token_name = INLINE_FORMATTING_TAGS[name]
        if not closing:
            open_stack.append(token_name)
            result.append(_format_token(token_name, 1))
        elif token_name in open_stack:
            while open_stack:
                top = open_stack.pop()
                result.append(_format_token(top, -1))
                if top == token_name:
                    break

    # Close whatever the message left open so the inline stack stays balanced
    while open_stack:
        result.append(_format_token(open_stack.pop(), -1))

    return result


def _format_token(token_name: str, nesting: int) -> Token:
    suffix = "open" if nesting == 1 else "close"
    return Token(
        f"{token_name}_{suffix}",
        token_name,
        nesting,
        markup=_MARKUP[token_name],
    )


class SanitizedMarkdown(Markdown):
    """Rich markdown renderable fed by the same sanitized token stream.

    Used for line-mode output, so the console shows what the TUI shows.
    """

    def __init__(self, markup: str, **kwargs) -> None:
        super().__init__(markup, **kwargs)
        self.parsed = render_message(markup)
