"""Strict parser for an inline array of flat records.

Accepts the subset of script object-literal syntax that location directories
are published in::

    [{id: 1, name: 'Test Hall', "lat": -42.88, post_id: '44343,44344'},]

Keys are bare identifiers or quoted strings. Values are quoted strings,
numbers, ``true``, ``false`` or ``null``. Trailing commas and comments are
tolerated. Nothing is ever evaluated; any other construct is rejected.
"""

from __future__ import annotations

import re
from typing import Any

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_KEYWORDS = {"true": True, "false": False, "null": None}
_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "/": "/",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


class RecordLiteralError(ValueError):
    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.position = position


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str) -> RecordLiteralError:
        return RecordLiteralError(message, self.pos)

    def skip_ignored(self) -> None:
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char.isspace():
                self.pos += 1
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                if end == -1:
                    raise self.error("Unterminated comment")
                self.pos = end + 2
            else:
                return

    def peek(self) -> str:
        self.skip_ignored()
        if self.pos >= len(self.text):
            return ""
        return self.text[self.pos]

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise self.error(f"Expected {char!r}")
        self.pos += 1

    def parse_document(self) -> list[dict[str, Any]]:
        records = self.parse_array()
        if self.peek() == ";":
            self.pos += 1
        if self.peek() != "":
            raise self.error("Unexpected trailing content")
        return records

    def parse_array(self) -> list[dict[str, Any]]:
        self.expect("[")
        records: list[dict[str, Any]] = []
        while True:
            char = self.peek()
            if char == "]":
                self.pos += 1
                return records
            if char != "{":
                raise self.error("Expected a record")
            records.append(self.parse_record())
            char = self.peek()
            if char == ",":
                self.pos += 1
            elif char != "]":
                raise self.error("Expected ',' or ']' after record")

    def parse_record(self) -> dict[str, Any]:
        self.expect("{")
        record: dict[str, Any] = {}
        while True:
            char = self.peek()
            if char == "}":
                self.pos += 1
                return record
            key = self.parse_key()
            self.expect(":")
            record[key] = self.parse_scalar()
            char = self.peek()
            if char == ",":
                self.pos += 1
            elif char != "}":
                raise self.error("Expected ',' or '}' after value")

    def parse_key(self) -> str:
        char = self.peek()
        if char in ("'", '"'):
            return self.parse_string()
        match = _IDENTIFIER_RE.match(self.text, self.pos)
        if not match:
            raise self.error("Expected a key")
        self.pos = match.end()
        return match.group(0)

    def parse_scalar(self) -> Any:
        char = self.peek()
        if char in ("'", '"'):
            return self.parse_string()
        number = _NUMBER_RE.match(self.text, self.pos)
        if number:
            self.pos = number.end()
            literal = number.group(0)
            if any(c in literal for c in ".eE"):
                return float(literal)
            return int(literal)
        word = _IDENTIFIER_RE.match(self.text, self.pos)
        if word and word.group(0) in _KEYWORDS:
            self.pos = word.end()
            return _KEYWORDS[word.group(0)]
        raise self.error("Expected a string, number, true, false or null")

    def parse_string(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        out: list[str] = []
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(out)
            if char == "\n":
                raise self.error("Unterminated string")
            if char == "\\":
                self.pos += 1
                if self.pos >= len(text):
                    break
                escape = text[self.pos]
                if escape == "u":
                    digits = text[self.pos + 1 : self.pos + 5]
                    if len(digits) != 4 or not all(d in "0123456789abcdefABCDEF" for d in digits):
                        raise self.error("Invalid unicode escape")
                    out.append(chr(int(digits, 16)))
                    self.pos += 5
                    continue
                if escape == "\n":
                    self.pos += 1
                    continue
                out.append(_ESCAPES.get(escape, escape))
                self.pos += 1
                continue
            out.append(char)
            self.pos += 1
        raise self.error("Unterminated string")


def parse_record_literal(text: str) -> list[dict[str, Any]]:
    return _Parser(text).parse_document()
