# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.core.snapshot import ExecutionState

# @intent:constant CHIP-8のメモリ・表示・スタックの寸法を定義します。
MEMORY_SIZE = 0x1000
ADDRESS_MASK = MEMORY_SIZE - 1
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START  # 3584 bytes
REGISTER_COUNT = 16
STACK_DEPTH = 16
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
KEY_COUNT = 16
FLAG_REGISTER = 0xF

# @intent:constant 標準フォントセット（16グリフ × 5バイト）。0x000から配置されます。
FONT_ADDRESS = 0x000
GLYPH_SIZE = 5
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


# @intent:responsibility CHIP-8 CPUの全ての状態（レジスタ、メモリ、スタック、タイマー、フレームバッファ、入力スロット）を保持します。
# @intent:rationale 振る舞いを持たない純粋なデータ。変更は命令実装とタイマーサブシステムのみが行います。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUの状態を保持するデータクラス。
    spはstackへのインデックス（次に書き込む位置）です。
    """
    pc: int = PROGRAM_START
    registers: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    memory: bytearray = field(default_factory=lambda: bytearray(MEMORY_SIZE))
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    index_register: int = 0x0000
    delay_timer: int = 0
    sound_timer: int = 0
    framebuffer: bytearray = field(default_factory=lambda: bytearray(DISPLAY_WIDTH * DISPLAY_HEIGHT))
    pressed_key: Optional[int] = None
    execution_state: ExecutionState = ExecutionState.RUNNING

    # @intent:accessor レジスタへの書き込みは常に8ビットにマスクします。
    def set_register(self, index: int, value: int) -> None:
        self.registers[index] = value & 0xFF

    @property
    def vf(self) -> int:
        return self.registers[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.registers[FLAG_REGISTER] = value & 0xFF

    # @intent:accessor メモリアクセスのアドレスは[0, 4095]にマスクされます。
    def read_byte(self, address: int) -> int:
        return self.memory[address & ADDRESS_MASK]

    def write_byte(self, address: int, value: int) -> None:
        self.memory[address & ADDRESS_MASK] = value & 0xFF

    # @intent:accessor フレームバッファの画素を参照します。範囲外の座標は呼び出し側の契約違反です。
    def pixel(self, x: int, y: int) -> bool:
        return self.framebuffer[y * DISPLAY_WIDTH + x] != 0

    # @intent:responsibility フォントテーブルをメモリに配置します。
    def install_font(self) -> None:
        self.memory[FONT_ADDRESS:FONT_ADDRESS + len(FONT_SET)] = FONT_SET

    # @intent:responsibility プログラムのバイト列を0x200から配置します。
    # @intent:pre-condition dataの長さはMAX_PROGRAM_SIZE以下であることをChip8Cpu.load_programが保証します。
    def install_program(self, data: bytes) -> None:
        self.memory[PROGRAM_START:PROGRAM_START + len(data)] = data
