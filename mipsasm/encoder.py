"""Encoding of recognised instruction lines into 32-bit machine words."""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableSequence, Sequence
from dataclasses import dataclass

from mipsasm.lexer import InstructionType
from mipsasm.tables import (
    FIELD_MASK,
    INSTRUCTIONS,
    MAX_BRANCH_OFFSET,
    MAX_IMMEDIATE,
    MAX_SHAMT,
    RD_POS,
    RS_POS,
    RT_POS,
    SHAMT_POS,
    parse_register,
)

_INT32 = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class AssemblyError(ValueError):
    """Raised when an instruction cannot be encoded."""


@dataclass(frozen=True)
class PendingLabel:
    """A jump or branch whose target label was not yet defined when encoded."""

    address: int
    label: str
    relative: bool
    row: int | None = None


def _parse_int32(text: str) -> int | None:
    if not _INT32.fullmatch(text):
        return None
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        return None
    return value


def _register(name: str) -> int:
    try:
        return parse_register(name)
    except ValueError as exc:
        raise AssemblyError(str(exc)) from None


def _encode_r1(groups: Sequence[str]) -> int:
    command, rd, rs, rt = groups
    word = INSTRUCTIONS[command]
    word |= _register(rs) << RS_POS
    word |= _register(rt) << RT_POS
    word |= _register(rd) << RD_POS
    return word


def _encode_r2(groups: Sequence[str]) -> int:
    command, rd, rt, shamt_text = groups
    word = INSTRUCTIONS[command]
    word |= _register(rt) << RT_POS
    word |= _register(rd) << RD_POS
    shamt = _parse_int32(shamt_text)
    if shamt is None:
        raise AssemblyError("the immediate value is not a number")
    if shamt > MAX_SHAMT or shamt < 0:
        raise AssemblyError("the immediate value is not between 0-31")
    return word | ((shamt & FIELD_MASK) << SHAMT_POS)


def _encode_i1(groups: Sequence[str]) -> int:
    command, rt, rs, immediate_text = groups
    word = INSTRUCTIONS[command]
    word |= _register(rs) << RS_POS
    word |= _register(rt) << RT_POS
    immediate = _parse_int32(immediate_text)
    if immediate is None:
        raise AssemblyError("the immediate value is not a number")
    if immediate > MAX_IMMEDIATE:
        raise AssemblyError("the immediate value is too big")
    return word | (immediate & FIELD_MASK)


def _encode_i2(
    groups: Sequence[str], address: int, labels: Mapping[str, int]
) -> tuple[int, PendingLabel | None]:
    command, rs, rt, label = groups
    word = INSTRUCTIONS[command]
    word |= _register(rs) << RS_POS
    word |= _register(rt) << RT_POS
    if label not in labels:
        return word, PendingLabel(address=address, label=label, relative=True)
    distance = address - labels[label]
    if distance < 0 or distance > MAX_BRANCH_OFFSET:
        raise AssemblyError("relative jump is too big")
    # The target lies behind the branch: store the one's complement of the distance.
    return word | (~distance & FIELD_MASK), None


def _encode_i3(groups: Sequence[str]) -> int:
    command, rt, offset_text, rs = groups
    word = INSTRUCTIONS[command]
    word |= _register(rs) << RS_POS
    word |= _register(rt) << RT_POS
    offset = _parse_int32(offset_text)
    if offset is None:
        raise AssemblyError("offset is to big or not a number")
    if offset > MAX_IMMEDIATE:
        raise AssemblyError("offset is too big")
    return word | (offset & FIELD_MASK)


def _encode_j1(
    groups: Sequence[str], address: int, labels: Mapping[str, int]
) -> tuple[int, PendingLabel | None]:
    command, label = groups
    if not label:
        raise AssemblyError("Add label to jump instruction")
    word = INSTRUCTIONS[command]
    if label in labels:
        return word | labels[label], None
    return word, PendingLabel(address=address, label=label, relative=False)


def _encode_j2(groups: Sequence[str]) -> int:
    command, target = groups
    return INSTRUCTIONS[command] | (_register(target) << RS_POS)


def encode(
    kind: InstructionType,
    groups: Sequence[str],
    address: int,
    labels: Mapping[str, int],
) -> tuple[int, PendingLabel | None]:
    """Encode one instruction at the given word address.

    Returns the machine word and, when the instruction refers to a label that
    is not yet defined, a PendingLabel to be resolved later.
    Raises AssemblyError when the instruction is malformed.
    """
    if kind is InstructionType.R1:
        return _encode_r1(groups), None
    if kind is InstructionType.R2:
        return _encode_r2(groups), None
    if kind is InstructionType.I1:
        return _encode_i1(groups), None
    if kind is InstructionType.I2:
        return _encode_i2(groups, address, labels)
    if kind is InstructionType.I3:
        return _encode_i3(groups), None
    if kind is InstructionType.J1:
        return _encode_j1(groups, address, labels)
    if kind is InstructionType.J2:
        return _encode_j2(groups), None
    return 0, None


def resolve_pending(
    pending: PendingLabel,
    machine_code: MutableSequence[int],
    labels: Mapping[str, int],
) -> None:
    """Patch the word at the pending address with its now defined target.

    Raises AssemblyError when the label is still undefined or the branch
    target is out of reach.
    """
    if pending.label not in labels:
        raise AssemblyError("Label undefined!")
    target = labels[pending.label]
    if not pending.relative:
        machine_code[pending.address] |= target
        return
    # The program counter has already advanced by one when the branch executes.
    offset = target - pending.address - 1
    if offset < 0 or offset > MAX_BRANCH_OFFSET:
        raise AssemblyError("Label undefined!")
    machine_code[pending.address] |= offset