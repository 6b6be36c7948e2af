# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のCPUの観測可能な状態を記録した不変のデータ構造を定義します。
ホスト（トレース出力、UI）への情報提供に用いる責務を負います。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


# @intent:responsibility 実行エンジンの状態を定義します。
# @intent:rationale キー入力待ちをビジーウェイトではなく明示的な状態として表現し、ホストに制御を返すために使用します。
class ExecutionState(Enum):
    RUNNING = "RUNNING"
    AWAITING_KEY = "AWAITING_KEY"


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    デコードされた命令の詳細（オペコード、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode: int  # 例: 0x6A2F
    mnemonic: str  # 例: "LD"
    operands: List[str] = field(default_factory=list)  # 例: ["VA", "$2F"]
    length: int = 2  # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    # @intent:responsibility ニーモニックとオペランドを連結した表示用文字列を返します。
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計命令数、表示用テキスト）を記録するデータクラス。
    """
    instruction_count: int
    text: Optional[str] = None  # 例: "JP $0200"


# @intent:responsibility ある一時点におけるCPUの観測可能な状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1命令実行後のCPU状態を記録した不変のデータ構造。
    レジスタはコピーとして保持するため、以降のstepで内容が変化することはありません。
    operationは、キー入力待ちで命令をフェッチしなかった場合Noneになります。
    """
    initial_pc: int
    operation: Optional[Operation]
    registers: Dict[str, int]
    execution_state: ExecutionState
    metadata: Metadata
