"""Assembler for a subset of the MIPS instruction set, with listing and machine code output."""

__version__ = "1.0.0"
__all__ = ["assembler", "encoder", "lexer", "listing", "tables"]