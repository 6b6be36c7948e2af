# tests/arch/chip8/test_decoder.py
"""
retro_chip8.arch.chip8.decoder とディスパッチテーブルの単体テスト。
"""
from random import Random
from types import MappingProxyType

import pytest

from retro_chip8.common.errors import UndefinedOpcode
from retro_chip8.arch.chip8.decoder import decode, fetch, selector
from retro_chip8.arch.chip8.instructions import Chip8Operation, InstructionSpec, decode_opcode, execute_instruction, lookup
from retro_chip8.arch.chip8.instructions.base import vx_byte_operands
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.instructions.maps import DISPATCH_TABLE, build_dispatch_table

# @intent:test_suite オペコードの分解とディスパッチの網羅性を検証します。

# 35命令それぞれの代表的なオペコードと期待するパターン
DOCUMENTED_OPCODES = [
    (0x0123, "0NNN"), (0x00E0, "00E0"), (0x00EE, "00EE"),
    (0x1ABC, "1NNN"), (0x2ABC, "2NNN"), (0x3A12, "3XNN"), (0x4A12, "4XNN"),
    (0x5AB0, "5XY0"), (0x6A12, "6XNN"), (0x7A12, "7XNN"),
    (0x8AB0, "8XY0"), (0x8AB1, "8XY1"), (0x8AB2, "8XY2"), (0x8AB3, "8XY3"),
    (0x8AB4, "8XY4"), (0x8AB5, "8XY5"), (0x8AB6, "8XY6"), (0x8AB7, "8XY7"),
    (0x8ABE, "8XYE"), (0x9AB0, "9XY0"), (0xA123, "ANNN"), (0xB123, "BNNN"),
    (0xCA12, "CXNN"), (0xDAB5, "DXYN"), (0xEA9E, "EX9E"), (0xEAA1, "EXA1"),
    (0xFA07, "FX07"), (0xFA0A, "FX0A"), (0xFA15, "FX15"), (0xFA18, "FX18"),
    (0xFA1E, "FX1E"), (0xFA29, "FX29"), (0xFA33, "FX33"), (0xFA55, "FX55"),
    (0xFA65, "FX65"),
]

UNDEFINED_OPCODES = [
    0x5AB1, 0x5ABF, 0x8AB8, 0x8ABD, 0x8ABF, 0x9AB1, 0xEA00, 0xEA9F,
    0xFA00, 0xFA08, 0xFA30, 0xFAFF,
]


def test_decode_fields():
    fields = decode(0xD12F)
    assert fields.opcode == 0xD12F
    assert fields.kind == 0xD
    assert fields.x == 0x1
    assert fields.y == 0x2
    assert fields.n == 0xF
    assert fields.nn == 0x2F
    assert fields.nnn == 0x12F


def test_fetch_is_big_endian():
    memory = bytearray(0x1000)
    memory[0x200] = 0xA2
    memory[0x201] = 0xF0
    assert fetch(memory, 0x200) == 0xA2F0


def test_fetch_masks_second_byte_address():
    memory = bytearray(0x1000)
    memory[0xFFF] = 0x12
    memory[0x000] = 0x34
    assert fetch(memory, 0xFFF) == 0x1234


@pytest.mark.parametrize("opcode, expected", [
    (0x00E0, (0x0, 0x0E0)),
    (0x00EE, (0x0, 0x0EE)),
    (0x0123, (0x0, None)),
    (0x8AB6, (0x8, 0x6)),
    (0xEA9E, (0xE, 0x9E)),
    (0xF165, (0xF, 0x65)),
    (0x1234, (0x1, None)),
])
def test_selector(opcode, expected):
    assert selector(decode(opcode)) == expected


def test_dispatch_table_has_35_instructions():
    assert len(DISPATCH_TABLE) == 35
    patterns = {spec.pattern for spec in DISPATCH_TABLE.values()}
    assert len(patterns) == 35


def test_dispatch_table_is_read_only():
    table = build_dispatch_table()
    with pytest.raises(TypeError):
        table[(0x0, None)] = None


@pytest.mark.parametrize("opcode, pattern", DOCUMENTED_OPCODES)
def test_every_documented_opcode_resolves_to_one_handler(opcode, pattern):
    spec = DISPATCH_TABLE[selector(decode(opcode))]
    assert spec.pattern == pattern
    matches = [s for s in DISPATCH_TABLE.values() if s is spec]
    assert len(matches) == 1


@pytest.mark.parametrize("opcode", UNDEFINED_OPCODES)
def test_undefined_opcode_raises(opcode):
    assert lookup(opcode) is None
    with pytest.raises(UndefinedOpcode) as excinfo:
        decode_opcode(opcode)
    assert excinfo.value.opcode == opcode


def test_decoded_operation_text():
    assert decode_opcode(0x6A2F).text() == "LD VA, $2F"
    assert decode_opcode(0xD125).text() == "DRW V1, V2, 5"
    assert decode_opcode(0xF355).text() == "LD [I], V3"
    assert decode_opcode(0xF265).text() == "LD V2, [I]"
    assert decode_opcode(0x00EE).text() == "RET"
    assert decode_opcode(0xA123).text() == "LD I, $123"


def test_decoded_operation_carries_its_handler():
    calls = []

    def record(state, rng, op):
        calls.append(op.opcode)

    table = MappingProxyType({(0x6, None): InstructionSpec("6XNN", "LD", vx_byte_operands, record)})
    operation = lookup(0x6A2F, table)
    assert operation.handler is record
    assert lookup(0x00E0, table) is None

    # 実行時にディスパッチテーブルを再検索しない
    execute_instruction(operation, Chip8CpuState(), Random(0))
    assert calls == [0x6A2F]


def test_operation_without_handler_is_rejected():
    operation = Chip8Operation(opcode=0x6A2F, mnemonic="LD")
    with pytest.raises(UndefinedOpcode):
        execute_instruction(operation, Chip8CpuState(), Random(0))


def test_handler_does_not_affect_equality():
    assert decode_opcode(0x6A2F) == lookup(0x6A2F, build_dispatch_table())
