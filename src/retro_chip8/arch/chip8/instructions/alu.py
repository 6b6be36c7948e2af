# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFを更新する命令は、結果をVXに書き込んだ後にVFを設定します（X = F の場合はフラグが残ります）。
"""
from random import Random

from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Chip8Operation, advance

# --- ADD Vx, NN ---
# @intent:responsibility ADD Vx, NN (7XNN)。キャリーフラグは変更しません。
def execute_add_byte(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.set_register(op.x, state.registers[op.x] + op.nn)
    advance(state)

# --- LD Vx, Vy ---
# @intent:responsibility LD Vx, Vy (8XY0)。
def execute_ld_reg(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.set_register(op.x, state.registers[op.y])
    advance(state)

# --- OR / AND / XOR ---
def execute_or(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.set_register(op.x, state.registers[op.x] | state.registers[op.y])
    advance(state)

def execute_and(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.set_register(op.x, state.registers[op.x] & state.registers[op.y])
    advance(state)

def execute_xor(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.set_register(op.x, state.registers[op.x] ^ state.registers[op.y])
    advance(state)

# --- ADD Vx, Vy ---
# @intent:responsibility ADD Vx, Vy (8XY4)。マスク前の和が255を超えた場合 VF = 1、それ以外は VF = 0。
def execute_add_reg(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    res = state.registers[op.x] + state.registers[op.y]
    state.set_register(op.x, res)
    state.vf = 1 if res > 0xFF else 0
    advance(state)

# --- SUB Vx, Vy ---
# @intent:responsibility SUB Vx, Vy (8XY5)。結果が負（ボロー）なら VF = 0、それ以外は VF = 1。
def execute_sub(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    res = state.registers[op.x] - state.registers[op.y]
    state.set_register(op.x, res)
    state.vf = 0 if res < 0 else 1
    advance(state)

# --- SUBN Vx, Vy ---
# @intent:responsibility SUBN Vx, Vy (8XY7): VX = VY - VX。フラグの極性はSUBと同じです。
def execute_subn(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    res = state.registers[op.y] - state.registers[op.x]
    state.set_register(op.x, res)
    state.vf = 0 if res < 0 else 1
    advance(state)

# --- SHR / SHL ---
# @intent:responsibility SHR Vx (8XY6): VX自身を右シフトし、押し出されたビットをVFに格納します。
def execute_shr(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    value = state.registers[op.x]
    shifted_out = value & 0x01
    state.set_register(op.x, value >> 1)
    state.vf = shifted_out
    advance(state)

# @intent:responsibility SHL Vx (8XYE): VX自身を左シフトし、押し出されたビットをマスク前にVFへ取り込みます。
def execute_shl(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    res = state.registers[op.x] << 1
    shifted_out = (res >> 8) & 0x01
    state.set_register(op.x, res)
    state.vf = shifted_out
    advance(state)

# --- RND ---
# @intent:responsibility RND Vx, NN (CXNN): 乱数バイトとNNの論理積をVXに格納します。
def execute_rnd(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.set_register(op.x, rng.randint(0, 0xFF) & op.nn)
    advance(state)
