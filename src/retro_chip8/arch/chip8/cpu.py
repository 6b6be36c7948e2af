# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
from random import Random
from typing import List, Optional

from retro_chip8.common.errors import UndefinedOpcode
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import ExecutionState, Snapshot
from retro_chip8.common.types import DisassemblyLine, RegisterInfo, RegisterLayoutInfo, RegisterMap
from retro_chip8.arch.chip8 import disassembler, timers
from retro_chip8.arch.chip8.decoder import fetch
from retro_chip8.arch.chip8.instructions import Chip8Operation, build_dispatch_table, execute_instruction, lookup
from retro_chip8.arch.chip8.state import Chip8CpuState, KEY_COUNT, MAX_PROGRAM_SIZE, REGISTER_COUNT

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。
    状態の唯一の所有者であり、ホストには読み取り用のアクセサと入力スロットへの書き込みのみを公開します。
    """
    # @intent:responsibility Chip8Cpuを初期化します。
    # @intent:pre-condition `rng`を指定すると乱数命令の結果を再現可能にできます。
    def __init__(self, rng: Optional[Random] = None):
        self._rng = rng if rng is not None else Random()
        self._dispatch_table = build_dispatch_table()
        self._program = b""
        super().__init__()

    # @intent:responsibility ゼロ初期化した状態にフォントと直近のプログラムを配置して返します。
    def _create_initial_state(self) -> Chip8CpuState:
        state = Chip8CpuState()
        state.install_font()
        state.install_program(self._program)
        return state

    # @intent:responsibility プログラムを設定し、CPUを丸ごとリセットします。
    # @intent:pre-condition 3584バイトを超えるプログラムはホスト側で拒否されている必要があります。
    def load_program(self, data: bytes) -> None:
        if len(data) > MAX_PROGRAM_SIZE:
            raise ValueError(f"Program of {len(data)} bytes exceeds {MAX_PROGRAM_SIZE} bytes.")
        self._program = bytes(data)
        self.reset()

    @property
    def execution_state(self) -> ExecutionState:
        return self._state.execution_state

    # @intent:responsibility 現在押されているキー（無ければNone）を設定します。ホストからの唯一の書き込み口です。
    def set_pressed_key(self, key: Optional[int]) -> None:
        if key is not None and not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key code {key!r} is outside 0x0-0xF.")
        self._state.pressed_key = key

    # @intent:responsibility 60Hzのティックで両タイマーを減算します。
    def tick_timers(self) -> None:
        timers.tick(self._state)

    # @intent:responsibility サウンドタイマーが動作中（ブザーを鳴らすべき）かを返します。
    @property
    def sound_active(self) -> bool:
        return self._state.sound_timer > 0

    # @intent:responsibility フレームバッファの画素を返します。
    def pixel(self, x: int, y: int) -> bool:
        return self._state.pixel(x, y)

    # @intent:responsibility 描画用にフレームバッファのコピーを返します（行優先、1画素1バイト）。
    def framebuffer(self) -> bytes:
        return bytes(self._state.framebuffer)

    # @intent:responsibility キー入力待ちでキーが無い場合、フェッチせずに現在の状態を返します。
    def _handle_suspended(self, current_pc: int) -> Optional[Snapshot]:
        if self._state.execution_state is ExecutionState.AWAITING_KEY and self._state.pressed_key is None:
            return self._create_snapshot(current_pc, None)
        return None

    # @intent:responsibility メモリから次のオペコードをフェッチします。
    def _fetch(self) -> int:
        return fetch(self._state.memory, self._state.pc)

    # @intent:responsibility オペコードをデコードします。未定義ならUndefinedOpcodeを送出し、状態は変更しません。
    def _decode(self, opcode: int) -> Chip8Operation:
        operation = lookup(opcode, self._dispatch_table)
        if operation is None:
            raise UndefinedOpcode(opcode, self._state.pc)
        return operation

    # @intent:responsibility Operationを実行し、状態を更新します。PCの更新は各命令が行います。
    def _execute(self, operation: Chip8Operation) -> None:
        execute_instruction(operation, self._state, self._rng)

    # @intent:responsibility UI表示・トレース用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> RegisterMap:
        s = self._state
        reg_map = {f"V{i:X}": s.registers[i] for i in range(REGISTER_COUNT)}
        reg_map.update({
            "I": s.index_register, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return reg_map

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{i:X}", 8) for i in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._state.memory, start_addr, length)
