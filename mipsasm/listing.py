"""Output of an assembled program: listing file, machine code file and command."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from mipsasm.assembler import Assembly, assemble_file

LISTING_NAME = "asm_listing"
MACHINE_CODE_NAME = "asm_instr"

_WORD_BYTES = 4
_GUTTER = " " * 24
_TABLE_TOP = "┌-----------┬------------┐"
_TABLE_BOTTOM = "└-----------┴------------┘"


def _hex(value: int) -> str:
    return format(value, "#010x")


def format_listing(assembly: Assembly) -> str:
    """Render the listing: every source line, with address and word where code was produced,
    followed by the table of labels and their byte addresses."""
    out: list[str] = []
    words = iter(assembly.machine_code)
    index = 0
    for line in assembly.lines:
        if line.has_code:
            out.append(f"{_hex(index * _WORD_BYTES)}  {_hex(next(words))}  {line.text}\n")
            index += 1
        else:
            out.append(f"{_GUTTER}{line.text}\n")

    out.append(f"\n  {'Label name':10}   {'Address':10}\n")
    out.append(_TABLE_TOP + "\n")
    for label, address in assembly.labels.items():
        out.append(f"│{label:10} │ {_hex(address * _WORD_BYTES)} │\n")
    out.append(_TABLE_BOTTOM + "\n")
    return "".join(out)


def format_machine_code(assembly: Assembly) -> str:
    """Render one machine word per line, as hexadecimal with a 0x prefix."""
    words = iter(assembly.machine_code)
    return "".join(
        f"{_hex(next(words))}\n" for line in assembly.lines if line.has_code
    )


def write_files(
    assembly: Assembly, directory: str | os.PathLike[str] = "."
) -> tuple[Path, Path]:
    """Write the listing and machine code files into ``directory``.

    Returns the paths of the listing file and the machine code file.
    """
    folder = Path(directory)
    listing_path = folder / LISTING_NAME
    machine_path = folder / MACHINE_CODE_NAME
    listing_path.write_text(format_listing(assembly), encoding="utf-8", newline="")
    machine_path.write_text(format_machine_code(assembly), encoding="utf-8", newline="")
    return listing_path, machine_path


def main(argv: list[str] | None = None) -> int:
    """Assemble a file and write asm_listing and asm_instr to the working directory."""
    parser = argparse.ArgumentParser(
        prog="mipsasm", description="Assemble a MIPS source file into machine code."
    )
    parser.add_argument("filename", help="assembly source file")
    args = parser.parse_args(argv)

    try:
        assembly = assemble_file(args.filename)
    except OSError:
        print("Cannot open file", file=sys.stderr)
        return 1

    write_files(assembly)
    return 0


if __name__ == "__main__":
    sys.exit(main())