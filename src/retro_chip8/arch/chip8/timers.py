# src/retro_chip8/arch/chip8/timers.py
"""
タイマーサブシステム。

遅延タイマーとサウンドタイマーを、命令実行とは独立した60Hzの外部ティックで減算します。
"""
from retro_chip8.arch.chip8.state import Chip8CpuState

# @intent:constant ホストがtick()を呼び出すべき周期。
TIMER_HZ = 60

# @intent:responsibility 両タイマーを1ずつ減算します。0未満にはなりません。
def tick(state: Chip8CpuState) -> None:
    if state.delay_timer > 0:
        state.delay_timer -= 1
    if state.sound_timer > 0:
        state.sound_timer -= 1
