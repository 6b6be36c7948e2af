# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックス、タイマー、メモリ）の実装。
"""
from random import Random

from retro_chip8.core.snapshot import ExecutionState
from retro_chip8.arch.chip8.state import Chip8CpuState, FONT_ADDRESS, GLYPH_SIZE
from .base import Chip8Operation, advance

# --- LD Vx, NN ---
# @intent:responsibility LD Vx, NN (6XNN)。
def execute_ld_byte(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.set_register(op.x, op.nn)
    advance(state)

# --- LD I, NNN ---
# @intent:responsibility LD I, NNN (ANNN)。
def execute_ld_i(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.index_register = op.nnn
    advance(state)

# --- ADD I, Vx ---
# @intent:responsibility ADD I, Vx (FX1E)。Iは16ビット幅で折り返します。
def execute_add_i(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.index_register = (state.index_register + state.registers[op.x]) & 0xFFFF
    advance(state)

# --- Timers ---
# @intent:responsibility LD Vx, DT (FX07)。
def execute_ld_vx_dt(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.set_register(op.x, state.delay_timer)
    advance(state)

# @intent:responsibility LD DT, Vx (FX15)。
def execute_ld_dt_vx(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.delay_timer = state.registers[op.x]
    advance(state)

# @intent:responsibility LD ST, Vx (FX18)。
def execute_ld_st_vx(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.sound_timer = state.registers[op.x]
    advance(state)

# --- LD Vx, K ---
# @intent:responsibility LD Vx, K (FX0A): キー入力を待ちます。
# @intent:rationale キーが無い場合はPCを進めずAWAITING_KEY状態にして制御をホストへ返します（ビジーウェイトしない）。
#                  再度stepされた際に同じ命令が再実行され、キーがあれば完了します。
def execute_ld_vx_k(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    if state.pressed_key is None:
        state.execution_state = ExecutionState.AWAITING_KEY
        return
    state.set_register(op.x, state.pressed_key)
    state.execution_state = ExecutionState.RUNNING
    advance(state)

# --- LD F, Vx ---
# @intent:responsibility LD F, Vx (FX29): VXの下位ニブルに対応するフォントグリフのアドレスをIに設定します。
def execute_ld_f(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.index_register = FONT_ADDRESS + (state.registers[op.x] & 0xF) * GLYPH_SIZE
    advance(state)

# --- LD B, Vx ---
# @intent:responsibility LD B, Vx (FX33): VXを百・十・一の位に分解して memory[I..I+2] に格納します。
def execute_ld_b(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    value = state.registers[op.x]
    i = state.index_register
    state.write_byte(i, value // 100)
    state.write_byte(i + 1, (value // 10) % 10)
    state.write_byte(i + 2, value % 10)
    advance(state)

# --- LD [I], Vx ---
# @intent:responsibility LD [I], Vx (FX55): V0..VX を memory[I..] に格納し、I を X + 1 進めます。
def execute_store_regs(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    i = state.index_register
    for offset in range(op.x + 1):
        state.write_byte(i + offset, state.registers[offset])
    state.index_register = (i + op.x + 1) & 0xFFFF
    advance(state)

# --- LD Vx, [I] ---
# @intent:responsibility LD Vx, [I] (FX65): memory[I..] から V0..VX を読み込み、I を X + 1 進めます。
def execute_load_regs(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    i = state.index_register
    for offset in range(op.x + 1):
        state.set_register(offset, state.read_byte(i + offset))
    state.index_register = (i + op.x + 1) & 0xFFFF
    advance(state)
