from dataclasses import dataclass, field
from typing import Dict, Optional

@dataclass
class DisplayConfig:
    scale: int = 10  # 1画素あたりの表示ピクセル数
    foreground: str = "#FFFFFF"
    background: str = "#000000"

@dataclass
class EmulatorConfig:
    cpu_hz: int = 500  # 1秒あたりの実行命令数
    trace: bool = False  # 1命令ごとのデバッグトレースを出力するか
    rom: Optional[str] = None
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: Dict[str, int] = field(default_factory=dict)  # 既定のキー配置を上書きする
