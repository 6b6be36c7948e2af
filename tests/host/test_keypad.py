# tests/host/test_keypad.py
"""
retro_chip8.host.keypadモジュールの単体テスト。
"""
from retro_chip8.host.keypad import DEFAULT_KEYMAP, Keypad

# @intent:test_suite ホストキー名から論理キーへの変換と押下状態の管理を検証します。

class TestKeypad:
    def test_default_layout(self):
        keypad = Keypad()
        assert keypad.translate("1") == 0x1
        assert keypad.translate("4") == 0xC
        assert keypad.translate("x") == 0x0
        assert keypad.translate("V") == 0xF
        assert keypad.translate("p") is None
        assert sorted(DEFAULT_KEYMAP.values()) == list(range(16))

    def test_overrides(self):
        keypad = Keypad({"P": 0x0, "x": 0x5})
        assert keypad.translate("p") == 0x0
        assert keypad.translate("x") == 0x5
        assert keypad.translate("q") == 0x4

    def test_current_is_last_pressed(self):
        keypad = Keypad()
        assert keypad.current is None
        keypad.press(0x1)
        keypad.press(0x2)
        assert keypad.current == 0x2
        keypad.release(0x2)
        assert keypad.current == 0x1
        keypad.release(0x1)
        assert keypad.current is None

    def test_repeat_press_and_unknown_release(self):
        keypad = Keypad()
        keypad.press(0x1)
        keypad.press(0x2)
        keypad.press(0x1)
        assert keypad.current == 0x1
        keypad.release(0xA)
        keypad.release(0x1)
        assert keypad.current == 0x2

    def test_release_all(self):
        keypad = Keypad()
        keypad.press(0x3)
        keypad.press(0x4)
        keypad.release_all()
        assert keypad.current is None
