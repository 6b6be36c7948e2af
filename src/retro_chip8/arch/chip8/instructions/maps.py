# src/retro_chip8/arch/chip8/instructions/maps.py
"""
ディスパッチキー（命令クラス, サブセレクタ）と命令実装のマッピング定義。
"""
from types import MappingProxyType
from typing import Mapping

from retro_chip8.arch.chip8.decoder import DispatchKey
from . import alu
from . import control
from . import display
from . import load
from .base import (
    InstructionSpec, no_operands, addr_operand, vx_operand, vx_byte_operands,
    vx_vy_operands, vx_vy_n_operands, fixed_operands,
)

# @intent:map ディスパッチキーから命令定義へのマッピング（35命令）。
_INSTRUCTIONS = {
    # Class 0
    (0x0, None): InstructionSpec("0NNN", "SYS", addr_operand, control.execute_sys),
    (0x0, 0x0E0): InstructionSpec("00E0", "CLS", no_operands, display.execute_cls),
    (0x0, 0x0EE): InstructionSpec("00EE", "RET", no_operands, control.execute_ret),

    # Flow / skips
    (0x1, None): InstructionSpec("1NNN", "JP", addr_operand, control.execute_jp),
    (0x2, None): InstructionSpec("2NNN", "CALL", addr_operand, control.execute_call),
    (0x3, None): InstructionSpec("3XNN", "SE", vx_byte_operands, control.execute_se_byte),
    (0x4, None): InstructionSpec("4XNN", "SNE", vx_byte_operands, control.execute_sne_byte),
    (0x5, 0x0): InstructionSpec("5XY0", "SE", vx_vy_operands, control.execute_se_reg),

    # Immediate
    (0x6, None): InstructionSpec("6XNN", "LD", vx_byte_operands, load.execute_ld_byte),
    (0x7, None): InstructionSpec("7XNN", "ADD", vx_byte_operands, alu.execute_add_byte),

    # ALU register-register
    (0x8, 0x0): InstructionSpec("8XY0", "LD", vx_vy_operands, alu.execute_ld_reg),
    (0x8, 0x1): InstructionSpec("8XY1", "OR", vx_vy_operands, alu.execute_or),
    (0x8, 0x2): InstructionSpec("8XY2", "AND", vx_vy_operands, alu.execute_and),
    (0x8, 0x3): InstructionSpec("8XY3", "XOR", vx_vy_operands, alu.execute_xor),
    (0x8, 0x4): InstructionSpec("8XY4", "ADD", vx_vy_operands, alu.execute_add_reg),
    (0x8, 0x5): InstructionSpec("8XY5", "SUB", vx_vy_operands, alu.execute_sub),
    (0x8, 0x6): InstructionSpec("8XY6", "SHR", vx_vy_operands, alu.execute_shr),
    (0x8, 0x7): InstructionSpec("8XY7", "SUBN", vx_vy_operands, alu.execute_subn),
    (0x8, 0xE): InstructionSpec("8XYE", "SHL", vx_vy_operands, alu.execute_shl),
    (0x9, 0x0): InstructionSpec("9XY0", "SNE", vx_vy_operands, control.execute_sne_reg),

    # Index / jump / random / draw
    (0xA, None): InstructionSpec("ANNN", "LD", lambda f: ["I", f"${f.nnn:03X}"], load.execute_ld_i),
    (0xB, None): InstructionSpec("BNNN", "JP", lambda f: ["V0", f"${f.nnn:03X}"], control.execute_jp_v0),
    (0xC, None): InstructionSpec("CXNN", "RND", vx_byte_operands, alu.execute_rnd),
    (0xD, None): InstructionSpec("DXYN", "DRW", vx_vy_n_operands, display.execute_drw),

    # Keys
    (0xE, 0x9E): InstructionSpec("EX9E", "SKP", vx_operand, control.execute_skp),
    (0xE, 0xA1): InstructionSpec("EXA1", "SKNP", vx_operand, control.execute_sknp),

    # Timers / memory
    (0xF, 0x07): InstructionSpec("FX07", "LD", fixed_operands(after=("DT",)), load.execute_ld_vx_dt),
    (0xF, 0x0A): InstructionSpec("FX0A", "LD", fixed_operands(after=("K",)), load.execute_ld_vx_k),
    (0xF, 0x15): InstructionSpec("FX15", "LD", fixed_operands(before=("DT",)), load.execute_ld_dt_vx),
    (0xF, 0x18): InstructionSpec("FX18", "LD", fixed_operands(before=("ST",)), load.execute_ld_st_vx),
    (0xF, 0x1E): InstructionSpec("FX1E", "ADD", fixed_operands(before=("I",)), load.execute_add_i),
    (0xF, 0x29): InstructionSpec("FX29", "LD", fixed_operands(before=("F",)), load.execute_ld_f),
    (0xF, 0x33): InstructionSpec("FX33", "LD", fixed_operands(before=("B",)), load.execute_ld_b),
    (0xF, 0x55): InstructionSpec("FX55", "LD", fixed_operands(before=("[I]",)), load.execute_store_regs),
    (0xF, 0x65): InstructionSpec("FX65", "LD", fixed_operands(after=("[I]",)), load.execute_load_regs),
}


# @intent:responsibility 読み取り専用のディスパッチテーブルを生成します。
# @intent:rationale 実行エンジンの生成時に一度だけ呼ばれ、以降は変更されません。
def build_dispatch_table() -> Mapping[DispatchKey, InstructionSpec]:
    return MappingProxyType(dict(_INSTRUCTIONS))


DISPATCH_TABLE = build_dispatch_table()
