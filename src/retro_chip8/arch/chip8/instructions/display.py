# src/retro_chip8/arch/chip8/instructions/display.py
"""
画面命令（クリア、スプライト描画）の実装。
"""
from random import Random

from retro_chip8.arch.chip8.state import Chip8CpuState, DISPLAY_WIDTH, DISPLAY_HEIGHT
from .base import Chip8Operation, advance

# --- CLS ---
# @intent:responsibility CLS (00E0): フレームバッファの全画素を消去します。
def execute_cls(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    state.framebuffer[:] = bytes(len(state.framebuffer))
    advance(state)

# --- DRW ---
# @intent:responsibility DRW Vx, Vy, N (DXYN): memory[I] からNバイトのスプライトをXOR合成します。
# @intent:rationale 画面外の座標に当たる画素はクリップ（描画しない）します。原点も折り返しません。
#                  VFは命令開始時に0とし、1→0に変化した画素があれば1にします（一度1になったら戻しません）。
def execute_drw(state: Chip8CpuState, rng: Random, op: Chip8Operation) -> None:
    origin_x = state.registers[op.x]
    origin_y = state.registers[op.y]
    collision = 0

    for row in range(op.n):
        y = origin_y + row
        if y >= DISPLAY_HEIGHT:
            break
        sprite_byte = state.read_byte(state.index_register + row)
        for bit in range(8):
            if not sprite_byte & (0x80 >> bit):
                continue
            x = origin_x + bit
            if x >= DISPLAY_WIDTH:
                break
            offset = y * DISPLAY_WIDTH + x
            if state.framebuffer[offset]:
                collision = 1
            state.framebuffer[offset] ^= 1

    state.vf = collision
    advance(state)
