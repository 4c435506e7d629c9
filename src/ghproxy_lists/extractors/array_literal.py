"""
Extraction of `name = [ ['url', 'region', 'description'], ... ]` literals from
loosely structured script text.

The text is walked with a small tokenizer that tracks quote, comment and
regex-literal state, so `//` inside a quoted URL or a regex is never mistaken
for a comment. Bracket depth is tracked while walking the located array; only
entries that are exactly three quoted strings are kept.
"""
from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Optional, Tuple

from .base import NEWLINE_TOKEN, ExtractContext, ExtractResult, ProxyRecord

QUOTES = ("'", '"', "`")
FIELDS_PER_ENTRY = 3

_SPACE = re.compile(r"\s+")
_WORD = re.compile(r"[\w$]+")

# A `/` after one of these starts a regex literal rather than a division
_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%<>~^")
_REGEX_KEYWORDS = frozenset(
    ("return", "typeof", "instanceof", "case", "do", "else", "in", "of", "new", "delete", "void", "throw", "yield", "await")
)


@dataclass(frozen=True)
class _Token:
    kind: str  # string, word, punct, regex, unterminated
    value: str
    pos: int

    def is_punct(self, value: str) -> bool:
        return self.kind == "punct" and self.value == value


def _read_string(text: str, start: int) -> Tuple[str, Optional[int]]:
    """Read a quoted string starting at `start`. Returns (value, end) where end is None if unterminated."""
    quote = text[start]
    out: List[str] = []
    pos = start + 1
    n = len(text)
    while pos < n:
        ch = text[pos]
        if ch == "\\" and pos + 1 < n:
            nxt = text[pos + 1]
            if nxt in QUOTES or nxt == "\\":
                out.append(nxt)
            elif nxt != "\n":
                out.append(ch + nxt)
            pos += 2
            continue
        if ch == quote:
            return "".join(out), pos + 1
        out.append(ch)
        pos += 1
    return "".join(out), None


def _regex_allowed(prev: Optional[_Token]) -> bool:
    """A `/` starts a regex literal at the start of input or after an operator, opener or keyword."""
    if prev is None:
        return True
    if prev.kind == "punct":
        return prev.value in _REGEX_PRECEDERS
    return prev.kind == "word" and prev.value in _REGEX_KEYWORDS


def _read_regex(text: str, start: int) -> Optional[int]:
    """Return the end of the regex literal starting at `start`, or None if the line ends first."""
    pos = start + 1
    n = len(text)
    in_class = False
    while pos < n:
        ch = text[pos]
        if ch == "\n":
            return None
        if ch == "\\":
            pos += 2
            continue
        if ch == "[":
            in_class = True
        elif ch == "]":
            in_class = False
        elif ch == "/" and not in_class:
            m = _WORD.match(text, pos + 1)
            return m.end() if m else pos + 1
        pos += 1
    return None


def _tokenize(text: str, pos: int = 0) -> Iterator[_Token]:
    n = len(text)
    prev: Optional[_Token] = None
    while pos < n:
        m = _SPACE.match(text, pos)
        if m:
            pos = m.end()
            continue
        if text.startswith("//", pos):
            end = text.find("\n", pos)
            pos = n if end == -1 else end + 1
            continue
        if text.startswith("/*", pos):
            end = text.find("*/", pos + 2)
            pos = n if end == -1 else end + 2
            continue
        ch = text[pos]
        if ch == "/" and _regex_allowed(prev):
            end = _read_regex(text, pos)
            if end is not None:
                prev = _Token("regex", text[pos:end], pos)
                yield prev
                pos = end
                continue
        if ch in QUOTES:
            value, end = _read_string(text, pos)
            if end is None:
                yield _Token("unterminated", value, pos)
                return
            prev = _Token("string", value, pos)
            yield prev
            pos = end
            continue
        m = _WORD.match(text, pos)
        if m:
            prev = _Token("word", m.group(0), pos)
            yield prev
            pos = m.end()
            continue
        prev = _Token("punct", ch, pos)
        yield prev
        pos += 1


def _seek_declaration(tokens: Iterator[_Token], name: str) -> bool:
    """Advance `tokens` past `name = [`. Member accesses (`obj.name = [`) do not count."""
    window: Deque[_Token] = deque(maxlen=4)
    for tok in tokens:
        window.append(tok)
        if len(window) < 3 or not tok.is_punct("["):
            continue
        ident, eq = window[-3], window[-2]
        if ident.kind != "word" or ident.value != name or not eq.is_punct("="):
            continue
        if len(window) == 4 and window[0].is_punct("."):
            continue
        return True
    return False


def _collect_entries(tokens: Iterator[_Token]) -> Tuple[List[List[_Token]], bool]:
    """Group the tokens of each top-level entry until the array's closing bracket."""
    depth = 1
    entries: List[List[_Token]] = []
    current: Optional[List[_Token]] = None
    for tok in tokens:
        if tok.kind == "unterminated":
            return entries, False
        if tok.is_punct("["):
            depth += 1
            if depth == 2:
                current = []
                continue
        elif tok.is_punct("]"):
            depth -= 1
            if depth == 0:
                return entries, True
            if depth == 1 and current is not None:
                entries.append(current)
                current = None
                continue
        if current is not None:
            current.append(tok)
    return entries, False


def _entry_fields(tokens: List[_Token]) -> Optional[List[str]]:
    if tokens and tokens[-1].is_punct(","):
        tokens = tokens[:-1]
    if len(tokens) != FIELDS_PER_ENTRY * 2 - 1:
        return None
    for i, tok in enumerate(tokens):
        if i % 2 == 0 and tok.kind != "string":
            return None
        if i % 2 == 1 and not tok.is_punct(","):
            return None
    return [tok.value for tok in tokens[::2]]


def normalize_field(value: str) -> str:
    return _SPACE.sub(" ", value).strip()


def normalize_description(value: str) -> str:
    # Only descriptions carry the escaped-newline token
    return normalize_field(value).replace(NEWLINE_TOKEN, "\n")


class ArrayLiteralExtractor:
    def extract(self, content: str, *, context: ExtractContext) -> ExtractResult:
        tokens = _tokenize(content or "")
        if not _seek_declaration(tokens, context.array_name):
            return ExtractResult(records=[], found=False, complete=False)
        entries, complete = _collect_entries(tokens)

        seen = set()
        records: List[ProxyRecord] = []
        for entry in entries:
            fields = _entry_fields(entry)
            if fields is None:
                continue
            url, region = normalize_field(fields[0]), normalize_field(fields[1])
            description = normalize_description(fields[2])
            if not url or url in seen:
                continue
            seen.add(url)
            records.append(ProxyRecord(url=url, region=region, description=description))
        return ExtractResult(records=records, found=True, complete=complete)


def extract_array(source_text: str, array_name: str) -> List[ProxyRecord]:
    """Return the deduplicated records of `array_name`, or [] when it is not declared."""
    result = ArrayLiteralExtractor().extract(source_text, context=ExtractContext(array_name=array_name))
    return result.records
