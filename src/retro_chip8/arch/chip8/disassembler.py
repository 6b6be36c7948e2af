# src/retro_chip8/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用し、状態は一切変更しません。
"""
from typing import List, Sequence

from retro_chip8.common.types import DisassemblyLine
from retro_chip8.arch.chip8.decoder import fetch
from retro_chip8.arch.chip8.instructions import lookup
from retro_chip8.arch.chip8.state import MEMORY_SIZE

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: Sequence[int], start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    未定義のワードは "DW $XXXX" として表示します。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    end_addr = min(start_addr + length, MEMORY_SIZE - 1)
    current_addr = start_addr

    while current_addr < end_addr:
        opcode = fetch(memory, current_addr)
        operation = lookup(opcode)
        hex_bytes = f"{opcode >> 8:02X} {opcode & 0xFF:02X}"
        mnemonic_str = operation.text() if operation else f"DW ${opcode:04X}"
        result.append((current_addr, hex_bytes, mnemonic_str))
        current_addr += 2

    return result
