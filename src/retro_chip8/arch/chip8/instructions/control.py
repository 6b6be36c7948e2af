# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from random import Random

from retro_chip8.common.errors import StackOverflow, StackUnderflow
from retro_chip8.arch.chip8.state import Chip8CpuState, STACK_DEPTH
from .base import Chip8Operation, advance, skip_if

# --- SYS ---
# @intent:responsibility SYS (0NNN) 命令を実行します。マシン語ルーチン呼び出しはサポートせず、読み飛ばします。
def execute_sys(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    advance(state)

# --- JP ---
# @intent:responsibility JP (1NNN) 命令を実行し、PCをNNNに設定します。
def execute_jp(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.pc = op.nnn

# --- JP V0 ---
# @intent:responsibility JP V0 (BNNN) 命令を実行し、NNN + V0 へジャンプします。
def execute_jp_v0(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.pc = (op.nnn + state.registers[0]) & 0xFFF

# --- CALL ---
# @intent:responsibility CALL (2NNN) 命令を実行し、呼び出し元アドレスをスタックにプッシュしてからジャンプします。
# @intent:pre-condition スタックに空きがない場合、状態を変更せずにStackOverflowを送出します。
def execute_call(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    if state.sp >= STACK_DEPTH:
        raise StackOverflow(f"Subroutine nesting exceeded {STACK_DEPTH} levels at {state.pc:#05x}")
    # 呼び出し命令自身のアドレスを積み、RETで+2する
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = op.nnn

# --- RET ---
# @intent:responsibility RET (00EE) 命令を実行し、スタックから戻りアドレスをポップします。
def execute_ret(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    if state.sp == 0:
        raise StackUnderflow(f"Return with an empty stack at {state.pc:#05x}")
    state.sp -= 1
    state.pc = (state.stack[state.sp] + 2) & 0xFFF

# --- SE / SNE ---
# @intent:responsibility SE Vx, NN (3XNN): VXがNNと等しければ次の命令をスキップします。
def execute_se_byte(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    skip_if(state, state.registers[op.x] == op.nn)

# @intent:responsibility SNE Vx, NN (4XNN): VXがNNと異なれば次の命令をスキップします。
def execute_sne_byte(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    skip_if(state, state.registers[op.x] != op.nn)

# @intent:responsibility SE Vx, Vy (5XY0)。
def execute_se_reg(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    skip_if(state, state.registers[op.x] == state.registers[op.y])

# @intent:responsibility SNE Vx, Vy (9XY0)。
def execute_sne_reg(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    skip_if(state, state.registers[op.x] != state.registers[op.y])

# --- SKP / SKNP ---
# @intent:responsibility SKP Vx (EX9E): VXのキーが押されていればスキップします。
def execute_skp(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    key = state.registers[op.x] & 0xF
    skip_if(state, state.pressed_key == key)

# @intent:responsibility SKNP Vx (EXA1): VXのキーが押されていなければスキップします。
def execute_sknp(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    key = state.registers[op.x] & 0xF
    skip_if(state, state.pressed_key != key)
