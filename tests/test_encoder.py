import pytest

from mipsasm.encoder import AssemblyError, PendingLabel, encode, resolve_pending
from mipsasm.lexer import InstructionType
from mipsasm.tables import INSTRUCTIONS, REGISTERS


def _fields(word):
    return {
        "rs": (word >> 21) & 31,
        "rt": (word >> 16) & 31,
        "rd": (word >> 11) & 31,
        "shamt": (word >> 6) & 31,
        "low": word & 0xFFFF,
    }


def test_addi_matches_known_words():
    assert encode(InstructionType.I1, ("addi", "t1", "zero", "1"), 0, {}) == (0x20090001, None)
    assert encode(InstructionType.I1, ("addi", "t4", "zero", "-4"), 0, {}) == (0x200CFFFC, None)


def test_r1_fields():
    word, pending = encode(InstructionType.R1, ("add", "t0", "s1", "a2"), 0, {})
    assert pending is None
    fields = _fields(word)
    assert fields["rd"] == REGISTERS["t0"]
    assert fields["rs"] == REGISTERS["s1"]
    assert fields["rt"] == REGISTERS["a2"]
    assert word & 0x3F == INSTRUCTIONS["add"]


def test_r1_numeric_register():
    word, _ = encode(InstructionType.R1, ("sub", "5", "6", "7"), 0, {})
    fields = _fields(word)
    assert (fields["rd"], fields["rs"], fields["rt"]) == (5, 6, 7)


def test_unknown_register_raises():
    with pytest.raises(AssemblyError, match="register does not exist"):
        encode(InstructionType.R1, ("add", "t0", "xx", "t1"), 0, {})


def test_register_out_of_range_raises():
    with pytest.raises(AssemblyError, match="between 0-31"):
        encode(InstructionType.J2, ("jr", "32"), 0, {})


def test_r2_shift_amount():
    word, _ = encode(InstructionType.R2, ("sll", "t0", "t1", "31"), 0, {})
    fields = _fields(word)
    assert fields["shamt"] == 31
    assert fields["rd"] == REGISTERS["t0"]
    assert fields["rt"] == REGISTERS["t1"]
    assert fields["rs"] == 0


@pytest.mark.parametrize("amount", ["32", "-1"])
def test_r2_shift_out_of_range(amount):
    with pytest.raises(AssemblyError, match="not between 0-31"):
        encode(InstructionType.R2, ("srl", "t0", "t1", amount), 0, {})


def test_r2_shift_not_a_number():
    with pytest.raises(AssemblyError, match="not a number"):
        encode(InstructionType.R2, ("sra", "t0", "t1", "abc"), 0, {})


def test_i1_maximum_immediate():
    word, _ = encode(InstructionType.I1, ("ori", "t0", "t1", "65535"), 0, {})
    assert word & 0xFFFF == 65535
    assert word & 0xFC000000 == INSTRUCTIONS["ori"]


def test_i1_immediate_too_big():
    with pytest.raises(AssemblyError, match="too big"):
        encode(InstructionType.I1, ("addi", "t0", "t1", "65536"), 0, {})


def test_i1_immediate_not_number():
    with pytest.raises(AssemblyError, match="not a number"):
        encode(InstructionType.I1, ("addi", "t0", "t1", "0x10"), 0, {})


def test_i3_load_fields():
    word, _ = encode(InstructionType.I3, ("lw", "t0", "8", "sp"), 0, {})
    fields = _fields(word)
    assert fields["rt"] == REGISTERS["t0"]
    assert fields["rs"] == REGISTERS["sp"]
    assert fields["low"] == 8
    assert word & 0xFC000000 == INSTRUCTIONS["lw"]


def test_i3_empty_offset_raises():
    with pytest.raises(AssemblyError, match="not a number"):
        encode(InstructionType.I3, ("sw", "t0", "", "sp"), 0, {})


def test_i3_offset_too_big():
    with pytest.raises(AssemblyError, match="offset is too big"):
        encode(InstructionType.I3, ("sw", "t0", "70000", "sp"), 0, {})


def test_beq_backward_branch_is_negative():
    word, pending = encode(InstructionType.I2, ("beq", "t0", "t1", "loop"), 3, {"loop": 0})
    assert pending is None
    low = word & 0xFFFF
    signed = low - 0x10000 if low & 0x8000 else low
    assert signed + 3 == -1
    fields = _fields(word)
    assert fields["rs"] == REGISTERS["t0"]
    assert fields["rt"] == REGISTERS["t1"]


def test_beq_forward_is_pending_and_resolves():
    word, pending = encode(InstructionType.I2, ("beq", "t0", "t1", "done"), 1, {})
    assert pending == PendingLabel(address=1, label="done", relative=True)
    assert word & 0xFFFF == 0
    code = [0, word, 0, 0, 0]
    resolve_pending(pending, code, {"done": 5})
    assert code[1] & 0xFFFF == 5 - 1 - 1
    assert code[1] >> 16 == word >> 16


def test_j_to_defined_label():
    word, pending = encode(InstructionType.J1, ("j", "start"), 4, {"start": 2})
    assert pending is None
    assert word == INSTRUCTIONS["j"] | 2


def test_j_forward_resolves_absolute():
    word, pending = encode(InstructionType.J1, ("j", "end"), 0, {})
    assert pending == PendingLabel(address=0, label="end", relative=False)
    code = [word, 0, 0]
    resolve_pending(pending, code, {"end": 2})
    assert code[0] == INSTRUCTIONS["j"] | 2


def test_jr_places_register_in_rs():
    word, _ = encode(InstructionType.J2, ("jr", "ra"), 0, {})
    assert _fields(word)["rs"] == REGISTERS["ra"]
    assert word & 0x3F == INSTRUCTIONS["jr"]


@pytest.mark.parametrize("kind,groups", [(InstructionType.NOP, ("nop",)), (InstructionType.EXIT, ("exit",))])
def test_nop_and_exit_encode_to_zero(kind, groups):
    assert encode(kind, groups, 7, {}) == (0, None)


def test_resolve_undefined_label_raises():
    pending = PendingLabel(address=0, label="nowhere", relative=False)
    code = [INSTRUCTIONS["j"]]
    with pytest.raises(AssemblyError, match="Label undefined!"):
        resolve_pending(pending, code, {"other": 1})
    assert code == [INSTRUCTIONS["j"]]


def test_resolve_relative_out_of_reach_raises():
    pending = PendingLabel(address=2, label="back", relative=True)
    code = [0, 0, INSTRUCTIONS["beq"]]
    with pytest.raises(AssemblyError):
        resolve_pending(pending, code, {"back": 0})
    assert code[2] == INSTRUCTIONS["beq"]