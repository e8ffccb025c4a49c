# mipsasm

An assembler for a small subset of the MIPS instruction set. It turns an
assembly source file into 32-bit machine code words and writes a listing
that shows where each instruction lands in memory, together with a table
of the labels that were defined.

## Supported instructions

`add`, `sub`, `and`, `or`, `nor`, `slt`, `sll`, `srl`, `sra`, `addi`,
`ori`, `lw`, `sw`, `beq`, `j`, `jr`, `nop` and the `exit` directive.
`exit` assembles to the word `0x00000000`; its word address is recorded in
`Assembly.exit_locations`.

## Source format

- Empty lines are allowed.
- `#` starts a comment, which runs to the end of the line.
- A label starts in the first column and ends with `:`. It can stand alone
  on a line or come before an instruction. If a label is defined twice, the
  first definition is kept.
- An instruction is preceded by exactly one white-space character (a tab or
  a blank) — directly after the label's colon, or at the start of the line.
  Operands are separated by commas.
- Registers are written by name (`$t0`, `$sp`, ...) or by number (`$8`,
  0 to 31).
- Immediates for `addi` and `ori` and offsets for `lw`/`sw` are decimal and
  may be negative; they must not exceed 65535. Shift amounts are 0 to 31.

Example:

```
# Count down from three
start: addi $t0, $zero, 3
loop: addi $t0, $t0, -1
 beq $t0, $zero, done
 j loop
done: nop
```

Errors do not stop assembly. A line that cannot be assembled is kept in the
listing with an `<-- Error:` note saying what is wrong (an unknown register,
an immediate that is out of range, an unrecognised instruction, a label that
is never defined, ...), and `Assembly.contains_errors` is set.

## Command line

```
mipsasm program.asm
```

The same command is available as `python -m mipsasm.listing program.asm`.
It writes two files into the current directory:

- `asm_instr` — one machine code word per line, in hexadecimal
  (`0x20090001`).
- `asm_listing` — each source line, preceded by its byte address and machine
  code where it produced a word, followed by a table of the labels and their
  byte addresses.

If the input file cannot be opened, the command prints `Cannot open file` to
standard error and exits with status 1.

## Library use

```python
from mipsasm.assembler import assemble_file
from mipsasm.listing import format_listing, format_machine_code

assembly = assemble_file("program.asm")
print(assembly.machine_code)      # list of ints
print(assembly.labels)            # label -> word address
print(format_machine_code(assembly))
print(format_listing(assembly))
```

- `mipsasm.assembler.assemble_lines(lines)` assembles an iterable of source
  lines; `assemble_file(path)` reads them from a file and raises `OSError`
  if it cannot be opened. Both return an `Assembly` with `machine_code`,
  `lines` (a list of `SourceLine` with `text` and `has_code`), `labels`,
  `contains_errors` and `exit_locations`.
- `mipsasm.listing.write_files(assembly, directory)` writes `asm_listing`
  and `asm_instr` into `directory` and returns both paths.
- `mipsasm.encoder.encode(kind, groups, address, labels)` encodes a single
  instruction and raises `AssemblyError` when it is malformed.
- `mipsasm.lexer.identify_type(text)` classifies an instruction text, and
  `mipsasm.tables.parse_register(name)` resolves a register name or number.

## What it does not do

This package only assembles. It does not run the machine code: there is no
simulator, no register or memory view and no graphical interface.

## Tests

```
pip install -e ".[test]"
pytest
```