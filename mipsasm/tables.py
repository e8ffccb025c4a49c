"""Register and instruction tables, field positions and limits of the encoding."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

RS_POS = 21
RT_POS = 16
RD_POS = 11
SHAMT_POS = 6

FIELD_MASK = 0x0000FFFF
MAX_IMMEDIATE = 0xFFFF
MAX_BRANCH_OFFSET = 0x7FFF
MAX_SHAMT = 31
MAX_REGISTER = 31

REGISTERS: Mapping[str, int] = MappingProxyType(
    {
        "zero": 0,
        "at": 1,
        "v0": 2,
        "v1": 3,
        "a0": 4,
        "a1": 5,
        "a2": 6,
        "a3": 7,
        "t0": 8,
        "t1": 9,
        "t2": 10,
        "t3": 11,
        "t4": 12,
        "t5": 13,
        "t6": 14,
        "t7": 15,
        "s0": 16,
        "s1": 17,
        "s2": 18,
        "s3": 19,
        "s4": 20,
        "s5": 21,
        "s6": 22,
        "s7": 23,
        "t8": 24,
        "t9": 25,
        "k0": 26,
        "k1": 27,
        "gp": 28,
        "sp": 29,
        "fp": 30,
        "ra": 31,
    }
)

INSTRUCTIONS: Mapping[str, int] = MappingProxyType(
    {
        "add": 0x00000020,
        "sub": 0x00000022,
        "addi": 0x08000000 << 2,
        "sll": 0x00000000,
        "slt": 0x0000002A,
        "and": 0x00000024,
        "or": 0x00000025,
        "nor": 0x00000027,
        "lw": 0x23000000 << 2,
        "sw": 0x2B000000 << 2,
        "beq": 0x04000000 << 2,
        "j": 0x02000000 << 2,
        "jr": 0x00000008,
        "nop": 0x00000000,
        "ori": 0x0D000000 << 2,
        "srl": 0x00000002,
        "sra": 0x00000003,
    }
)

_UNSIGNED = re.compile(r"\+?[0-9]+")


def parse_register(name: str) -> int:
    """Return the number of a register given by name or by number.

    Raises ValueError when the register is unknown or out of range.
    """
    if name in REGISTERS:
        return REGISTERS[name]
    if not _UNSIGNED.fullmatch(name):
        raise ValueError("register does not exist")
    number = int(name)
    if number > MAX_REGISTER:
        raise ValueError("register should be between 0-31")
    return number