# retro_chip8/host/trace.py
"""
デバッグトレース出力モジュール。

各step後の公開状態（オペコード、PC、16本のレジスタ）をテキストとして書き出します。
"""
import sys
from typing import Optional, TextIO

from retro_chip8.core.snapshot import Snapshot

# @intent:responsibility Snapshotを人間が読めるトレース文字列に変換します。
def format_trace(snapshot: Snapshot) -> str:
    """
    例:
        Opcode: 6a2f
        Program Counter: 202
        Registers -> V0: 0 | V1: 0 | ... | VF: 0 |
    """
    regs = snapshot.registers
    if snapshot.operation is not None:
        opcode_line = f"Opcode: {snapshot.operation.opcode:x}"
    else:
        opcode_line = "Opcode: (awaiting key)"
    register_line = "Registers -> " + "".join(
        f"V{i:x}: {regs[f'V{i:X}']:x} | " for i in range(16)
    )
    return f"{opcode_line}\nProgram Counter: {regs['PC']:x}\n{register_line}\n\n"

# @intent:responsibility トレース文字列をストリームへ書き出します。
class TraceWriter:
    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream if stream is not None else sys.stdout

    def write(self, snapshot: Snapshot) -> None:
        self._stream.write(format_trace(snapshot))
        self._stream.flush()
