"""Find account field names and their account types in Anchor program sources."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from pathlib import Path

_LEXEME_RE = re.compile(
    r"""
      (?P<skip>\s+|//[^\n]*)
    | (?P<raw>[bc]?r(?P<hashes>\#*)".*?"(?P=hashes))
    | (?P<str>[bc]?"(?:\\.|[^"\\])*")
    | (?P<char>b?'(?:\\.[^']*|[^\\'])')
    | (?P<life>'[A-Za-z_]\w*)
    | r\#(?P<rawid>[A-Za-z_]\w*)
    | (?P<ident>[A-Za-z_]\w*)
    | (?P<num>\d[\w.]*)
    | (?P<punct>::|->|=>|[^\s"'])
    """,
    re.VERBOSE | re.DOTALL,
)
_BLOCK = re.compile(r"/\*|\*/")
_IDENT = re.compile(r"[A-Za-z_]\w*")
_CLOSERS = {"(": ")", "[": "]", "{": "}"}
_PLACEHOLDERS = {"raw": '"', "str": '"', "char": "'c'", "num": "0"}


def _skip_block_comment(src: str, pos: int) -> int:
    depth = 0
    for m in _BLOCK.finditer(src, pos):
        depth += 1 if m.group() == "/*" else -1
        if depth == 0:
            return m.end()
    raise ValueError("unterminated block comment")


def _tokenize(src: str) -> list[str]:
    lexemes: list[str] = []
    pos = 0
    while pos < len(src):
        if src.startswith("/*", pos):
            pos = _skip_block_comment(src, pos)
            continue
        m = _LEXEME_RE.match(src, pos)
        if m is None:
            raise ValueError(f"unexpected input at offset {pos}")
        pos = m.end()
        kind = m.lastgroup
        if kind == "rawid":
            lexemes.append(m.group("rawid"))
        elif kind != "skip":
            lexemes.append(_PLACEHOLDERS.get(kind, m.group()))
    return lexemes


def _matching(tokens: list[str], start: int) -> int:
    stack: list[str] = []
    for k in range(start, len(tokens)):
        t = tokens[k]
        if t in _CLOSERS:
            stack.append(_CLOSERS[t])
        elif t in _CLOSERS.values():
            if not stack or stack.pop() != t:
                raise ValueError("mismatched delimiter")
            if not stack:
                return k
    raise ValueError("unbalanced delimiters")


def _split_commas(tokens: list[str]) -> list[list[str]]:
    groups: list[list[str]] = [[]]
    depth = 0
    for t in tokens:
        depth += (t in "([{<") - (t in ")]}>")
        if t == "," and depth == 0:
            groups.append([])
        else:
            groups[-1].append(t)
    return [g for g in groups if g]


def _close_angle(tokens: list[str], start: int) -> int | None:
    depth = 0
    for j in range(start, len(tokens)):
        depth += (tokens[j] == "<") - (tokens[j] == ">")
        if depth == 0:
            return j
    return None


def _last_segment(tokens: list[str]) -> tuple[str, list[list[str]] | None] | None:
    """Return the last segment of a type path and its generic arguments, or None."""
    k = 1 if tokens[:1] == ["::"] else 0
    while k < len(tokens) and _IDENT.fullmatch(tokens[k]):
        name, args, k = tokens[k], None, k + 1
        if tokens[k : k + 2] == ["::", "<"]:
            k += 1
        if tokens[k : k + 1] == ["<"]:
            close = _close_angle(tokens, k)
            if close is None:
                return None
            args, k = _split_commas(tokens[k + 1 : close]), close + 1
        if tokens[k : k + 1] != ["::"]:
            return (name, args) if k == len(tokens) else None
        k += 1
    return None


def _strip_visibility(tokens: list[str]) -> list[str]:
    if tokens[:1] != ["pub"]:
        return tokens
    if tokens[1:2] == ["("]:
        return tokens[_matching(tokens, 1) + 1 :]
    return tokens[1:]


def _derives_accounts(attr: list[str]) -> bool:
    if attr[:2] != ["derive", "("] or attr[-1:] != [")"]:
        return False
    return ["Accounts"] in _split_commas(attr[2:-1])


def _field_entries(body: list[str]) -> Iterator[tuple[str, str]]:
    for field in _split_commas(body):
        while field[:2] == ["#", "["]:
            field = field[_matching(field, 1) + 1 :]
        field = _strip_visibility(field)
        if len(field) < 3 or field[1] != ":" or not _IDENT.fullmatch(field[0]):
            continue
        segment = _last_segment(field[2:])
        if segment is None or segment[1] is None:
            continue
        wrapper, args = segment
        if wrapper in ("Account", "Program") and len(args) == 2:
            inner = _last_segment(args[1])
            if inner is not None:
                yield field[0], inner[0]
        elif wrapper == "Signer":
            yield field[0], "Signer"


def extract_from_source(source: str) -> dict[str, str]:
    """Map account field names to account types for top-level Accounts structs."""
    lexemes = _tokenize(source)
    result: dict[str, str] = {}
    i, n = 0, len(lexemes)
    while i < n:
        attrs: list[list[str]] = []
        while i < n and lexemes[i] == "#":
            inner = lexemes[i + 1 : i + 2] == ["!"]
            j = i + 2 if inner else i + 1
            if lexemes[j : j + 1] != ["["]:
                raise ValueError("malformed attribute")
            end = _matching(lexemes, j)
            if not inner:
                attrs.append(lexemes[j + 1 : end])
            i = end + 1
        start = i
        while i < n and lexemes[i] not in (";", "{"):
            if lexemes[i] in ("(", "["):
                i = _matching(lexemes, i) + 1
            elif lexemes[i] in (")", "]", "}"):
                raise ValueError("unexpected closing delimiter")
            else:
                i += 1
        if i >= n:
            break
        if lexemes[i] == ";":
            i += 1
            continue
        end = _matching(lexemes, i)
        header = _strip_visibility(lexemes[start:i])
        if header[:1] == ["struct"] and any(map(_derives_accounts, attrs)):
            result.update(_field_entries(lexemes[i + 1 : end]))
        i = end + 1
    return result


def extract_account_struct_map(source_dir: str | Path) -> dict[str, str]:
    """Scan every .rs file under a directory and merge their account maps."""
    root = Path(source_dir)
    if root.is_file():
        files = [root] if root.suffix == ".rs" else []
    else:
        files = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            files.extend(Path(dirpath) / f for f in sorted(filenames) if f.endswith(".rs"))
    result: dict[str, str] = {}
    for path in files:
        result.update(extract_from_source(path.read_text(encoding="utf-8")))
    return result