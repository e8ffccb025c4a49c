"""Recognition of instruction forms, comments and labels in source lines."""

from __future__ import annotations

import enum
import re


class InstructionType(enum.Enum):
    """The syntactic forms an instruction line may take."""

    R1 = "r1"
    R2 = "r2"
    I1 = "i1"
    I2 = "i2"
    I3 = "i3"
    J1 = "j1"
    J2 = "j2"
    NOP = "nop"
    EXIT = "exit"


_PATTERNS: tuple[tuple[InstructionType, re.Pattern[str]], ...] = (
    (
        InstructionType.R1,
        re.compile(r"^\s(add|sub|nor|or|and|slt)\s+\$(\S+),\s*\$(\S+),\s*\$(\S+)\s*\Z"),
    ),
    (
        InstructionType.R2,
        re.compile(r"^\s(sll|srl|sra)\s+\$(\S+),\s*\$(\S+),\s*(\S+)\s*\Z"),
    ),
    (
        InstructionType.I1,
        re.compile(r"^\s(addi|ori)\s+\$(\S+),\s*\$(\S+),\s*(\S+)\s*\Z"),
    ),
    (
        InstructionType.I2,
        re.compile(r"^\s(beq)\s+\$(\S+),\s*\$(\S+),\s*(\w+)\s*\Z"),
    ),
    (
        InstructionType.I3,
        re.compile(r"^\s(lw|sw)\s+\$(\S+),\s*(\S*)\(\$(\S+)\)\s*\Z"),
    ),
    (InstructionType.J1, re.compile(r"^\s(j)\s+(\w+)\s*\Z")),
    (InstructionType.J2, re.compile(r"^\s(jr)\s+\$(\S+)\s*\Z")),
    (InstructionType.NOP, re.compile(r"^\s(nop)\s*\Z")),
    (InstructionType.EXIT, re.compile(r"^\s(exit)\s*\Z")),
)

_LABEL = re.compile(r"([a-z]|[A-z]|[0-9])+[:]")


def identify_type(text: str) -> tuple[InstructionType, tuple[str, ...]] | None:
    """Classify an instruction text.

    Returns the instruction type and the captured parts (mnemonic first),
    or None when the text is no recognised instruction.
    """
    for kind, pattern in _PATTERNS:
        match = pattern.match(text)
        if match:
            return kind, match.groups()
    return None


def locate_comment(line: str) -> int | None:
    """Return the index of the first '#' in the line, or None."""
    index = line.find("#")
    return index if index >= 0 else None


def locate_label(line: str) -> tuple[str, int] | None:
    """Return a label at the start of the line and the index just past its colon."""
    match = _LABEL.match(line)
    if match is None:
        return None
    return line[: match.end() - 1], match.end()