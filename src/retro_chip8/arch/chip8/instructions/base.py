# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from dataclasses import dataclass, field
from random import Random
from typing import Callable, List, NamedTuple, Optional, Sequence

from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.decoder import OpcodeFields
from retro_chip8.arch.chip8.state import Chip8CpuState


# @intent:responsibility CHIP-8命令のデコード結果（オペランドフィールドを含む）を保持します。
# @intent:rationale デコード時に選ばれた実行関数を保持し、実行時にテーブルを再検索しません。
@dataclass(frozen=True)
class Chip8Operation(Operation):
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0
    handler: Optional[Callable[..., None]] = field(default=None, compare=False, repr=False)


ExecuteFunc = Callable[[Chip8CpuState, Random, Chip8Operation], None]
OperandFormatter = Callable[[OpcodeFields], List[str]]


# @intent:data_structure ディスパッチテーブルの1エントリ。ニーモニック、オペランド書式、実行関数の組です。
class InstructionSpec(NamedTuple):
    pattern: str  # 例: "8XY4"
    mnemonic: str
    format_operands: OperandFormatter
    execute: ExecuteFunc

    # @intent:responsibility 分解済みフィールドからOperationを生成します。
    def build(self, fields: OpcodeFields) -> Chip8Operation:
        return Chip8Operation(
            opcode=fields.opcode,
            mnemonic=self.mnemonic,
            operands=self.format_operands(fields),
            x=fields.x, y=fields.y, n=fields.n, nn=fields.nn, nnn=fields.nnn,
            handler=self.execute,
        )


# @intent:utility_function PCを次の命令へ進めます。
def advance(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFF


# @intent:utility_function 条件成立時は次の命令を読み飛ばします (PC += 4)。
def skip_if(state: Chip8CpuState, condition: bool) -> None:
    state.pc = (state.pc + (4 if condition else 2)) & 0xFFF


# --- オペランド書式 ---
def reg(index: int) -> str:
    return f"V{index:X}"


def no_operands(f: OpcodeFields) -> List[str]:
    return []


def addr_operand(f: OpcodeFields) -> List[str]:
    return [f"${f.nnn:03X}"]


def vx_operand(f: OpcodeFields) -> List[str]:
    return [reg(f.x)]


def vx_byte_operands(f: OpcodeFields) -> List[str]:
    return [reg(f.x), f"${f.nn:02X}"]


def vx_vy_operands(f: OpcodeFields) -> List[str]:
    return [reg(f.x), reg(f.y)]


def vx_vy_n_operands(f: OpcodeFields) -> List[str]:
    return [reg(f.x), reg(f.y), f"{f.n}"]


def fixed_operands(before: Sequence[str] = (), after: Sequence[str] = ()) -> OperandFormatter:
    """
    VX の前後に固定文字列を並べたオペランド書式を生成します。
    例: fixed_operands(before=("DT",)) -> ["DT", "VX"], fixed_operands(after=("K",)) -> ["VX", "K"]
    """
    def _format(f: OpcodeFields) -> List[str]:
        return [*before, reg(f.x), *after]
    return _format
