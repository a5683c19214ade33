"""Definition-file parser.

The definition format is line oriented.  Blank lines and lines starting with
``#`` are skipped; every other line is one signature whose first token is
the kind keyword::

    # string helpers
    method java.lang.String length
    staticMethod java.lang.Math max int int
    new java.util.ArrayList
    field java.awt.Point x
    staticField java.io.File separator

Parsing is all-or-nothing: the first malformed line raises
:class:`~script_sandbox.errors.SignatureParseError` and nothing is returned.
Existence of the named types and members is never checked here.

Example
-------
>>> parse_line("new java.io.File java.lang.String")
Signature(kind=<SignatureKind.NEW: 'new'>, type_name='java.io.File', member_name=None, parameter_types=('java.lang.String',))
"""
from __future__ import annotations

from typing import Iterable, Iterator

from script_sandbox.errors import SignatureParseError
from script_sandbox.signatures.model import Signature, SignatureKind

COMMENT_PREFIX = "#"

_KINDS: dict[str, SignatureKind] = {kind.value: kind for kind in SignatureKind}


def filter_line(line: str) -> str | None:
    """Return the trimmed content of *line*, or ``None`` if it must be skipped."""
    trimmed = line.strip()
    if not trimmed or trimmed.startswith(COMMENT_PREFIX):
        return None
    return trimmed


def parse_line(
    line: str,
    source: str | None = None,
    line_number: int | None = None,
) -> Signature:
    """Parse one definition line into a :class:`Signature`.

    Raises
    ------
    SignatureParseError
        If the kind keyword is unknown or the token count does not fit it.
    """
    tokens = line.split()
    if not tokens:
        raise SignatureParseError(line, "empty signature", source, line_number)

    kind = _KINDS.get(tokens[0])
    if kind is None:
        raise SignatureParseError(line, f"unknown kind {tokens[0]!r}", source, line_number)

    if kind in (SignatureKind.METHOD, SignatureKind.STATIC_METHOD):
        if len(tokens) < 3:
            raise SignatureParseError(
                line, f"{kind.value} needs a type and a member name", source, line_number
            )
        return Signature(kind, tokens[1], tokens[2], tuple(tokens[3:]))

    if kind is SignatureKind.NEW:
        if len(tokens) < 2:
            raise SignatureParseError(line, "new needs a type", source, line_number)
        return Signature(kind, tokens[1], None, tuple(tokens[2:]))

    if len(tokens) != 3:
        raise SignatureParseError(
            line, f"{kind.value} needs exactly a type and a field name", source, line_number
        )
    return Signature(kind, tokens[1], tokens[2])


def iter_signatures(lines: Iterable[str], source: str | None = None) -> Iterator[Signature]:
    """Yield a signature for every non-comment, non-blank line of *lines*."""
    for number, raw in enumerate(lines, start=1):
        content = filter_line(raw)
        if content is None:
            continue
        try:
            yield parse_line(content, source, number)
        except SignatureParseError as exc:
            # Report the line as it appeared in the source, not the trimmed copy.
            raise SignatureParseError(raw.rstrip("\r\n"), exc.reason, source, number) from None


def parse_lines(lines: Iterable[str], source: str | None = None) -> list[Signature]:
    """Parse a whole definition source, failing on the first bad line."""
    return list(iter_signatures(lines, source))


def parse_text(text: str, source: str | None = None) -> list[Signature]:
    return parse_lines(text.splitlines(), source)


def format_signatures(signatures: Iterable[Signature], sort: bool = False) -> str:
    """Serialize signatures back to definition-file text, one per line."""
    items = sorted(signatures) if sort else list(signatures)
    return "".join(f"{sig}\n" for sig in items)
