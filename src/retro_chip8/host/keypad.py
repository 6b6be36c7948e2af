# retro_chip8/host/keypad.py
"""
キーパッド変換モジュール。

ホストの物理キー名を、CHIP-8の16個の論理キーコード (0x0-0xF) に変換します。
"""
from typing import Dict, List, Mapping, Optional

# @intent:constant COSMAC VIPの4x4キーパッドを、キーボード左側の4x4ブロックに割り当てた既定配置。
#                 1 2 3 C      1 2 3 4
#                 4 5 6 D  <-  Q W E R
#                 7 8 9 E      A S D F
#                 A 0 B F      Z X C V
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}

# @intent:responsibility キー名の変換と、押下中キーの追跡を行います。
class Keypad:
    """
    ホストのキー名を論理キーコードに変換し、押されているキーを管理します。
    複数キーが押されている場合は、最後に押されたキーを現在のキーとします。
    """
    def __init__(self, overrides: Optional[Mapping[str, int]] = None):
        self._keymap: Dict[str, int] = dict(DEFAULT_KEYMAP)
        if overrides:
            self._keymap.update({name.lower(): code for name, code in overrides.items()})
        self._held: List[int] = []

    # @intent:responsibility キー名を論理キーコードに変換します。割り当てが無ければNoneを返します。
    def translate(self, key_name: str) -> Optional[int]:
        return self._keymap.get(key_name.lower())

    def press(self, code: int) -> None:
        if code in self._held:
            self._held.remove(code)
        self._held.append(code)

    def release(self, code: int) -> None:
        if code in self._held:
            self._held.remove(code)

    def release_all(self) -> None:
        self._held.clear()

    # @intent:responsibility 現在押されているキー（最後に押されたもの）を返します。
    @property
    def current(self) -> Optional[int]:
        return self._held[-1] if self._held else None
