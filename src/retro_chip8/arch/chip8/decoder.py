# src/retro_chip8/arch/chip8/decoder.py
"""
CHIP-8 命令デコーダ

16ビットのオペコードを命令クラスとニブル/バイトのオペランドに分解します。
副作用を持たない純粋な関数のみを提供します。
"""
from typing import NamedTuple, Optional, Sequence, Tuple

from retro_chip8.arch.chip8.state import ADDRESS_MASK

# @intent:data_structure オペコードを分解したフィールド群。
class OpcodeFields(NamedTuple):
    opcode: int
    kind: int  # 上位ニブル (0x0-0xF)
    x: int     # bits 8-11
    y: int     # bits 4-7
    n: int     # 下位4ビット
    nn: int    # 下位8ビット
    nnn: int   # 下位12ビット


# @intent:data_structure ディスパッチテーブルのキー (命令クラス, サブセレクタ)。
DispatchKey = Tuple[int, Optional[int]]

# @intent:constant 下位ニブルでサブ命令を選択する命令クラス。
_NIBBLE_SELECTED = (0x5, 0x8, 0x9)
# @intent:constant 下位バイトでサブ命令を選択する命令クラス。
_BYTE_SELECTED = (0xE, 0xF)
# @intent:constant クラス0のうち、下位12ビット全体で識別される命令。
_CLASS0_EXACT = (0x0E0, 0x0EE)


# @intent:utility_function メモリからビッグエンディアンの16ビットワードを読み出します。
def fetch(memory: Sequence[int], pc: int) -> int:
    return (memory[pc & ADDRESS_MASK] << 8) | memory[(pc + 1) & ADDRESS_MASK]


# @intent:responsibility オペコードを各フィールドに分解します。
def decode(opcode: int) -> OpcodeFields:
    return OpcodeFields(
        opcode=opcode,
        kind=(opcode >> 12) & 0xF,
        x=(opcode >> 8) & 0xF,
        y=(opcode >> 4) & 0xF,
        n=opcode & 0xF,
        nn=opcode & 0xFF,
        nnn=opcode & 0xFFF,
    )


# @intent:responsibility 分解済みフィールドからディスパッチキーを求めます。
# @intent:rationale 命令クラスとサブセレクタの組で35命令を一意に識別できます。
#                  クラス0は00E0/00EE以外をSYS (0NNN) として扱うため、サブセレクタをNoneにします。
def selector(fields: OpcodeFields) -> DispatchKey:
    if fields.kind == 0x0:
        return (0x0, fields.nnn if fields.nnn in _CLASS0_EXACT else None)
    if fields.kind in _NIBBLE_SELECTED:
        return (fields.kind, fields.n)
    if fields.kind in _BYTE_SELECTED:
        return (fields.kind, fields.nn)
    return (fields.kind, None)
