"""Render Markdown as wrapped plain text for a terminal."""

from __future__ import annotations

import re
from typing import Optional, TextIO

from markdown_it import MarkdownIt
from markdown_it.token import Token

BOLD = "\x1b[1m"
RED = "\x1b[31m"
RESET = "\x1b[0m"

_WHITESPACE = re.compile(r"\s")


def _isatty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except (OSError, ValueError):
        return False


class LineWrapper:
    """Writes words to a stream, wrapping them at a margin with an indent."""

    def __init__(self, stream: TextIO, indent: int, margin: int) -> None:
        self.stream = stream
        self.indent = indent
        self.margin = margin
        self.pos = indent

    def write_line(self) -> None:
        self.stream.write("\n")
        self.pos = 0

    def write_indent(self) -> None:
        if self.pos == 0:
            self.stream.write(" " * self.indent)
            self.pos = self.indent

    def write_word(self, word: str) -> None:
        """Write a word that must not be broken."""
        self.write_indent()
        if self.pos + len(word) > self.margin and self.pos > self.indent:
            self.write_line()
            self.write_indent()
        self.stream.write(word)
        self.pos += len(word)

    def write_space(self) -> None:
        if self.pos > self.indent:
            if self.pos < self.margin:
                self.write_word(" ")
            else:
                self.write_line()

    def write_span(self, text: str) -> None:
        """Write text that may wrap on whitespace."""
        words = iter(_WHITESPACE.split(text))
        self.write_word(next(words))
        for word in words:
            self.write_space()
            self.write_word(word)


class LineFormatter:
    """Turns a Markdown token stream into wrapped, optionally styled text."""

    def __init__(
        self,
        stream: TextIO,
        indent: int,
        margin: int,
        styled: Optional[bool] = None,
    ) -> None:
        self.wrapper = LineWrapper(stream, indent, margin)
        self.is_code_block = False
        self.attrs: list[str] = []
        self.styled = _isatty(stream) if styled is None else styled

    def _apply(self, code: str) -> None:
        if self.styled:
            self.wrapper.stream.write(code)

    def _push_attr(self, attr: str) -> None:
        self.attrs.append(attr)
        self._apply(attr)

    def _pop_attr(self) -> None:
        if self.attrs:
            self.attrs.pop()
        self._apply(RESET)
        for attr in self.attrs:
            self._apply(attr)

    def _text(self, text: str) -> None:
        if self.is_code_block:
            self.wrapper.write_word(text)
        else:
            self.wrapper.write_span(text)

    def _code_block(self, content: str) -> None:
        self.wrapper.write_line()
        self.wrapper.indent += 2
        self.is_code_block = True
        for line in content.splitlines():
            self._text(line)
            self.wrapper.write_line()
        self.is_code_block = False
        self.wrapper.indent -= 2

    def process_token(self, token: Token) -> None:
        """Render one token, descending into inline children."""
        wrapper = self.wrapper
        match token.type:
            case "paragraph_open" | "paragraph_close":
                if not token.hidden:
                    wrapper.write_line()
            case "heading_open":
                self._push_attr(BOLD)
                wrapper.write_line()
            case "heading_close":
                wrapper.write_line()
                self._pop_attr()
            case "fence" | "code_block":
                self._code_block(token.content)
            case "bullet_list_open" | "ordered_list_open":
                wrapper.write_line()
                wrapper.indent += 2
            case "bullet_list_close" | "ordered_list_close":
                wrapper.indent -= 2
                wrapper.write_line()
            case "list_item_open":
                wrapper.write_line()
            case "em_open":
                self._push_attr(RED)
            case "em_close":
                self._pop_attr()
            case "inline" | "image":
                for child in token.children or ():
                    self.process_token(child)
            case "text":
                self._text(token.content)
            case "code_inline":
                self._push_attr(BOLD)
                wrapper.write_word(token.content)
                self._pop_attr()
            case "softbreak" | "hardbreak":
                wrapper.write_line()
            case _:
                pass


def md(stream: TextIO, content: str) -> None:
    """Write ``content`` as wrapped terminal text to ``stream``."""
    formatter = LineFormatter(stream, 0, 79)
    for token in MarkdownIt("commonmark").parse(content):
        formatter.process_token(token)