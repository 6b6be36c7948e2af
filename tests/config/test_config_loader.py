# tests/config/test_config_loader.py
"""
retro_chip8.config.loaderモジュールの単体テスト。
"""
import pytest

from retro_chip8.common.errors import ConfigError
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import EmulatorConfig

# @intent:test_suite YAML設定ファイルの読み込みと検証。

class TestConfigLoader:
    @pytest.fixture
    def loader(self):
        return ConfigLoader()

    def test_load_full_config(self, loader, tmp_path):
        path = tmp_path / "chip8.yaml"
        path.write_text(
            "cpu_hz: 700\n"
            "trace: true\n"
            "rom: roms/pong.ch8\n"
            "display:\n"
            "  scale: 12\n"
            "  foreground: '#33ff66'\n"
            "  background: '#101010'\n"
            "keymap:\n"
            "  X: 0x0\n"
            "  p: '0xF'\n"
        )
        config = loader.load_from_file(str(path))
        assert config.cpu_hz == 700
        assert config.trace is True
        assert config.rom == "roms/pong.ch8"
        assert config.display.scale == 12
        assert config.display.foreground == "#33FF66"
        assert config.display.background == "#101010"
        assert config.keymap == {"x": 0x0, "p": 0xF}

    def test_empty_file_uses_defaults(self, loader, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert loader.load_from_file(str(path)) == EmulatorConfig()

    def test_partial_config_uses_defaults(self, loader):
        config = loader.parse({"cpu_hz": "0x100"})
        assert config.cpu_hz == 256
        assert config.display.scale == 10
        assert config.keymap == {}
        assert config.trace is False

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(ConfigError):
            loader.load_from_file(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, loader, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("cpu_hz: [1, 2\n")
        with pytest.raises(ConfigError):
            loader.load_from_file(str(path))

    @pytest.mark.parametrize("data", [
        ["not", "a", "mapping"],
        {"cpu_hz": 0},
        {"cpu_hz": -5},
        {"cpu_hz": True},
        {"cpu_hz": "fast"},
        {"display": {"scale": 0}},
        {"display": {"foreground": "white"}},
        {"display": {"background": "#12345"}},
        {"keymap": {"q": 16}},
        {"keymap": {"q": -1}},
    ])
    def test_invalid_values(self, loader, data):
        with pytest.raises(ConfigError):
            loader.parse(data)
