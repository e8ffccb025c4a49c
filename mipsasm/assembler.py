"""Two-pass assembly of source lines into machine words and an annotated listing."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterable
from dataclasses import dataclass, field

from mipsasm.encoder import AssemblyError, PendingLabel, encode, resolve_pending
from mipsasm.lexer import InstructionType, identify_type, locate_comment, locate_label

_ERROR_PREFIX = "     <-- Error: "
_UNRECOGNISED = "instruction not recognized or wrong format on instruction"
_UNDEFINED_LABEL = "Label undefined!"


@dataclass
class SourceLine:
    """One line of the input, possibly annotated with an error message."""

    text: str
    has_code: bool = False


@dataclass
class Assembly:
    """The result of assembling a program."""

    machine_code: list[int] = field(default_factory=list)
    lines: list[SourceLine] = field(default_factory=list)
    labels: dict[str, int] = field(default_factory=dict)
    contains_errors: bool = False
    exit_locations: list[int] = field(default_factory=list)


def _strip_newline(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def assemble_lines(lines: Iterable[str]) -> Assembly:
    """Assemble the given source lines.

    Errors do not abort assembly: they are appended to the offending line's
    text and recorded in ``contains_errors``.
    """
    result = Assembly()
    pending: list[PendingLabel] = []
    address = 0

    for row, raw in enumerate(lines):
        text = _strip_newline(raw)
        has_code = False
        if text:
            comment = locate_comment(text)
            comment_index = len(text) if comment is None else comment

            found = locate_label(text)
            if found is not None:
                label, label_index = found
                result.labels.setdefault(label, address)
            else:
                label_index = 0

            body = text[label_index:comment_index]
            recognised = identify_type(body)
            if recognised is not None:
                kind, groups = recognised
                try:
                    word, unresolved = encode(kind, groups, address, result.labels)
                except AssemblyError as exc:
                    text += _ERROR_PREFIX + str(exc)
                    result.contains_errors = True
                else:
                    if unresolved is not None:
                        pending.append(dataclasses.replace(unresolved, row=row))
                    if kind is InstructionType.EXIT:
                        result.exit_locations.append(address)
                    has_code = True
                    result.machine_code.append(word)
                address += 1
            elif found is None and len(body.encode("utf-8")) > 1:
                text += _ERROR_PREFIX + _UNRECOGNISED
                result.contains_errors = True
        result.lines.append(SourceLine(text, has_code))

    for item in pending:
        try:
            resolve_pending(item, result.machine_code, result.labels)
        except AssemblyError:
            line = result.lines[item.row]
            line.text += _ERROR_PREFIX + _UNDEFINED_LABEL
            line.has_code = True
            result.contains_errors = True

    return result


def _read_lines(path: str | os.PathLike[str]) -> list[str]:
    with open(path, "rb") as handle:
        data = handle.read()
    if not data:
        return []
    chunks = data.split(b"\n")
    if data.endswith(b"\n"):
        chunks.pop()
    decoded = []
    for chunk in chunks:
        if chunk.endswith(b"\r"):
            chunk = chunk[:-1]
        try:
            decoded.append(chunk.decode("utf-8"))
        except UnicodeDecodeError:
            continue
    return decoded


def assemble_file(path: str | os.PathLike[str]) -> Assembly:
    """Assemble the program in the file at ``path``.

    Raises OSError when the file cannot be opened.
    """
    return assemble_lines(_read_lines(path))