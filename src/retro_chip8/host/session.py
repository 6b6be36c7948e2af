# retro_chip8/host/session.py
"""
ホストアダプタ（エミュレーションセッション）

実行エンジンの周囲にある薄いアダプタです。
ROMのロード、stepの実行頻度、60Hzのタイマーティック、キー入力の受け渡し、
フレームバッファの読み出し、デバッグトレースを担当します。
GUIには依存しないため、UI層以外（テストやヘッドレス実行）からも利用できます。
"""
import logging
from dataclasses import dataclass
from random import Random
from typing import Optional

from retro_chip8.common.errors import Chip8Error, RomLoadError
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.core.snapshot import ExecutionState, Snapshot
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.timers import TIMER_HZ
from retro_chip8.loader.rom_loader import RomLoader
from .keypad import Keypad
from .trace import TraceWriter

logger = logging.getLogger(__name__)


# @intent:responsibility ROMロードの結果を表します。ロード時エラーは例外ではなくこの結果として利用者に返されます。
@dataclass(frozen=True)
class LoadResult:
    ok: bool
    path: str
    message: str = ""
    size: int = 0


# @intent:responsibility 1つのエミュレーションセッションを管理します。
class Chip8Session:
    """
    CPUの唯一の所有者として、ホスト側の操作をCPUへ仲介するクラス。
    step()は再入可能ではなく、単一のスレッドから呼び出す必要があります。
    """
    def __init__(self, config: Optional[EmulatorConfig] = None, rng: Optional[Random] = None,
                 trace_writer: Optional[TraceWriter] = None):
        self._config = config if config is not None else EmulatorConfig()
        self._cpu = Chip8Cpu(rng)
        self._loader = RomLoader()
        self._keypad = Keypad(self._config.keymap)
        if trace_writer is None and self._config.trace:
            trace_writer = TraceWriter()
        self._trace = trace_writer
        self._rom_path: Optional[str] = None
        self._halted = False
        self._last_error: Optional[Chip8Error] = None

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def config(self) -> EmulatorConfig:
        return self._config

    @property
    def rom_path(self) -> Optional[str]:
        return self._rom_path

    @property
    def loaded(self) -> bool:
        return self._rom_path is not None

    @property
    def halted(self) -> bool:
        return self._halted

    @property
    def last_error(self) -> Optional[Chip8Error]:
        return self._last_error

    # @intent:responsibility 1フレーム（1/60秒）あたりに実行する命令数を返します。
    @property
    def cycles_per_frame(self) -> int:
        return max(1, round(self._config.cpu_hz / TIMER_HZ))

    # @intent:responsibility ROMファイルをロードし、新しいプログラムでCPUをリセットします。
    # @intent:post-condition 失敗した場合、現在のセッション（CPU状態とROM）は変更されません。
    def open_rom(self, path: str) -> LoadResult:
        try:
            data = self._loader.load_rom(path)
        except RomLoadError as e:
            logger.warning("ROM load failed: %s", e)
            return LoadResult(ok=False, path=path, message=f"{e}. Please pick another file.")

        self._cpu.load_program(data)
        self._rom_path = path
        self._halted = False
        self._last_error = None
        self._keypad.release_all()
        logger.info("Loaded ROM %s (%d bytes)", path, len(data))
        return LoadResult(ok=True, path=path, size=len(data))

    # @intent:responsibility 直近のROMを再ロードした状態にCPUを丸ごと戻します。
    def reset(self) -> None:
        self._cpu.reset()
        self._halted = False
        self._last_error = None
        logger.info("Session reset")

    # @intent:responsibility 押下中のキーをCPUの入力スロットへ反映し、1命令を実行します。
    # @intent:post-condition コアが致命的エラーを検出した場合、セッションは停止状態となり例外は呼び出し元へ伝播します。
    def step(self) -> Snapshot:
        if self._halted:
            raise RuntimeError("Session is halted; reset or load another ROM.")
        self._cpu.set_pressed_key(self._keypad.current)
        try:
            snapshot = self._cpu.step()
        except Chip8Error as e:
            self._halted = True
            self._last_error = e
            logger.error("Emulation halted: %s", e)
            raise
        if self._trace is not None and snapshot.operation is not None:
            self._trace.write(snapshot)
        return snapshot

    # @intent:responsibility 60Hzのタイマーティックを1回行います。
    def tick(self) -> None:
        self._cpu.tick_timers()

    # @intent:responsibility 1フレーム分の命令を実行し、最後にタイマーを1ティック進めます。
    # @intent:rationale キー入力待ちになった場合は、そのフレームの残りの命令実行を打ち切ります（スピンしない）。
    def run_frame(self) -> int:
        executed = 0
        if self.loaded and not self._halted:
            for _ in range(self.cycles_per_frame):
                snapshot = self.step()
                if snapshot.operation is not None:
                    executed += 1
                if snapshot.execution_state is ExecutionState.AWAITING_KEY:
                    break
        self.tick()
        return executed

    # --- 入力 ---
    def press_key(self, code: int) -> None:
        self._keypad.press(code)

    def release_key(self, code: int) -> None:
        self._keypad.release(code)

    # @intent:responsibility ホストのキー名による押下を処理します。割り当てのあるキーならTrueを返します。
    def key_down(self, key_name: str) -> bool:
        code = self._keypad.translate(key_name)
        if code is None:
            return False
        self._keypad.press(code)
        return True

    def key_up(self, key_name: str) -> bool:
        code = self._keypad.translate(key_name)
        if code is None:
            return False
        self._keypad.release(code)
        return True

    # --- 出力 ---
    def pixel(self, x: int, y: int) -> bool:
        return self._cpu.pixel(x, y)

    def framebuffer(self) -> bytes:
        return self._cpu.framebuffer()

    @property
    def sound_active(self) -> bool:
        return self._cpu.sound_active
