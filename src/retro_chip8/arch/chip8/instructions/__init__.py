# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from random import Random
from typing import Mapping, Optional

from retro_chip8.common.errors import UndefinedOpcode
from retro_chip8.arch.chip8.decoder import DispatchKey, decode, selector
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Chip8Operation, InstructionSpec
from .maps import DISPATCH_TABLE, build_dispatch_table

# @intent:responsibility オペコードに対応する命令定義を検索します。未定義の場合はNoneを返します。
def lookup(opcode: int, table: Mapping[DispatchKey, InstructionSpec] = DISPATCH_TABLE) -> Optional[Chip8Operation]:
    fields = decode(opcode)
    spec = table.get(selector(fields))
    if spec is None:
        return None
    return spec.build(fields)

# @intent:responsibility 与えられたオペコードをCHIP-8の命令としてデコードします。
# @intent:post-condition 35命令のいずれにも一致しない場合はUndefinedOpcodeを送出します。
def decode_opcode(opcode: int, table: Mapping[DispatchKey, InstructionSpec] = DISPATCH_TABLE) -> Chip8Operation:
    operation = lookup(opcode, table)
    if operation is None:
        raise UndefinedOpcode(opcode)
    return operation

# @intent:responsibility デコードされたCHIP-8命令を実行し、CPUの状態を変更します。
# @intent:pre-condition operationはlookup/decode_opcodeで生成され、実行関数を保持している必要があります。
def execute_instruction(operation: Chip8Operation, state: Chip8CpuState, rng: Random) -> None:
    if operation.handler is None:
        raise UndefinedOpcode(operation.opcode, state.pc)
    operation.handler(state, rng, operation)
