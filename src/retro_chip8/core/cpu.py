# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from retro_chip8.core.snapshot import Snapshot, Operation, Metadata, ExecutionState
from retro_chip8.core.state import CpuState
from retro_chip8.common.types import DisassemblyLine, RegisterLayoutInfo, RegisterMap

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    基本的な状態管理と命令サイクル（テンプレートメソッド）を提供します。
    """
    # @intent:responsibility CPUの状態を初期化します。
    def __init__(self):
        self._state: CpuState = self._create_initial_state()
        self._instruction_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        具体的なCPUアーキテクチャはこのメソッドを実装し、
        そのアーキテクチャに特化したCpuStateのサブクラスを返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    # @intent:rationale 部分的な再初期化は行わず、_create_initial_stateを再呼び出しして状態を丸ごと作り直します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._instruction_count = 0

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        return self._state

    # @intent:responsibility 現在の実行状態を返します。既定では常に実行中です。
    @property
    def execution_state(self) -> ExecutionState:
        return ExecutionState.RUNNING

    # @intent:responsibility メモリから次の命令（オペコード）をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCからメモリの次の命令（オペコード）をフェッチし、その値を返します。
        PCは変更しません。PCの更新は命令の実行側の責務です。
        """
        pass

    # @intent:responsibility フェッチしたオペコードを解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        """
        与えられたオペコードを解析し、その命令のニーモニック、オペランドなどの詳細を
        Operationオブジェクトとして返します。
        解析できないオペコードの場合は状態を変更せずに例外を送出します。
        """
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（停止判定→フェッチ→デコード→実行→Snapshot生成）を定義します。
    #                  アーキテクチャ固有の振る舞い（入力待ちなど）はフックメソッドで対応します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPU状態を含むSnapshotオブジェクトを返します。
        """
        initial_pc = self._state.pc

        # 1. 停止判定 (Hook)
        suspended_snapshot = self._handle_suspended(initial_pc)
        if suspended_snapshot:
            return suspended_snapshot

        # 2. フェッチ
        opcode = self._fetch()

        # 3. デコード
        operation = self._decode(opcode)

        # 4. 実行 (PC更新は各命令が行う)
        self._execute(operation)
        self._instruction_count += 1

        # 5. Snapshot生成
        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility 停止（入力待ちなど）状態の場合の処理を行います。
    # @intent:return 停止中であればその状態のSnapshot、そうでなければNone。
    def _handle_suspended(self, current_pc: int) -> Optional[Snapshot]:
        return None

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Optional[Operation]) -> Snapshot:
        return Snapshot(
            initial_pc=initial_pc,
            operation=operation,
            registers=dict(self.get_register_map()),
            execution_state=self.execution_state,
            metadata=Metadata(
                instruction_count=self._instruction_count,
                text=operation.text() if operation else None,
            ),
        )

    @abstractmethod
    def get_register_map(self) -> RegisterMap:
        """
        現在のレジスタ値を辞書形式で返す。
        UIやトレース出力がCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをUI上でどのように配置・グループ化すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_bytes, mnemonic) のタプルリストを返す。
        """
        pass
