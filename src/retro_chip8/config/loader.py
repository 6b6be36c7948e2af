import re
import yaml
from typing import Dict, Any

from retro_chip8.common.errors import ConfigError
from .models import EmulatorConfig, DisplayConfig

_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        try:
            with open(path, 'r', encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Could not read config '{path}': {e}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in '{path}': {e}")
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping.")

        cpu_hz = self._parse_int(data.get("cpu_hz", 500), "cpu_hz")
        if cpu_hz <= 0:
            raise ConfigError(f"cpu_hz must be positive: {cpu_hz}")

        # Parse Display
        display_data = data.get("display", {}) or {}
        scale = self._parse_int(display_data.get("scale", 10), "display.scale")
        if scale <= 0:
            raise ConfigError(f"display.scale must be positive: {scale}")
        display = DisplayConfig(
            scale=scale,
            foreground=self._parse_color(display_data.get("foreground", "#FFFFFF"), "display.foreground"),
            background=self._parse_color(display_data.get("background", "#000000"), "display.background"),
        )

        # Parse Keymap ("q": 0x4 など)
        keymap = {}
        for key_name, code in (data.get("keymap", {}) or {}).items():
            value = self._parse_int(code, f"keymap.{key_name}")
            if not 0 <= value <= 0xF:
                raise ConfigError(f"keymap.{key_name} must be within 0x0-0xF: {value:#x}")
            keymap[str(key_name).lower()] = value

        rom = data.get("rom")
        return EmulatorConfig(
            cpu_hz=cpu_hz,
            trace=bool(data.get("trace", False)),
            rom=str(rom) if rom is not None else None,
            display=display,
            keymap=keymap,
        )

    def _parse_int(self, value: Any, name: str) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer for {name}: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer for {name}: {value}")

    def _parse_color(self, value: Any, name: str) -> str:
        if isinstance(value, str) and _COLOR_PATTERN.match(value):
            return value.upper()
        raise ConfigError(f"Invalid colour for {name}: {value} (expected #RRGGBB)")
