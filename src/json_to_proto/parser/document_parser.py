"""Splits raw input text into independent JSON documents."""

from __future__ import annotations

import json
import re
from typing import Any, List

from json_to_proto.errors import EmptyInputError, InvalidJsonError, NoDocumentsFoundError

# Whitespace and `---` separator lines between documents
_GAP = re.compile(r"(?:\s+|-{3,}(?=\s|$))*")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


_decoder = json.JSONDecoder(parse_constant=_reject_constant)


def parse_documents(raw: str) -> List[Any]:
    """Parse raw input into an ordered list of JSON documents.

    The whole input is tried first. A non-empty whole-input array yields one
    document per element. Otherwise, if the input is not a single document, it
    is scanned as a sequence of documents separated by whitespace, blank lines,
    or lines of three or more dashes.
    """
    text = raw.strip()
    if not text:
        raise EmptyInputError()

    try:
        whole = _decoder.decode(text)
    except RecursionError as e:
        raise InvalidJsonError("nesting exceeds the decoder recursion limit", text) from e
    except ValueError:
        return _scan_documents(text)

    if isinstance(whole, list) and whole:
        return list(whole)
    return [whole]


def _scan_documents(text: str) -> List[Any]:
    documents: List[Any] = []
    pos = 0
    while True:
        pos = _GAP.match(text, pos).end()
        if pos >= len(text):
            break
        try:
            value, pos = _decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            detail = f"{e.msg} (line {e.lineno}, column {e.colno})"
            raise InvalidJsonError(detail, _fragment_at(text, pos)) from e
        except RecursionError as e:
            raise InvalidJsonError(
                "nesting exceeds the decoder recursion limit", _fragment_at(text, pos)
            ) from e
        except ValueError as e:
            raise InvalidJsonError(str(e), _fragment_at(text, pos)) from e
        documents.append(value)

    if not documents:
        raise NoDocumentsFoundError()
    return documents


def _fragment_at(text: str, pos: int) -> str:
    """The document text starting at pos, up to the next blank line."""
    return re.split(r"\n\s*\n", text[pos:], maxsplit=1)[0]
