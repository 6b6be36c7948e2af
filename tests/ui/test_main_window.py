import os
import sys
import tempfile
import unittest
from unittest.mock import patch

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication, QMessageBox

from retro_chip8.config.models import EmulatorConfig
from retro_chip8.ui.app import build_parser, resolve_config
from retro_chip8.ui.main_window import MainWindow
from retro_chip8.ui.register_view import RegisterView
from retro_chip8.common.errors import ConfigError
from retro_chip8.common.types import RegisterInfo, RegisterLayoutInfo

class TestMainWindow(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.window = MainWindow(EmulatorConfig())

    def tearDown(self):
        self.window.close()

    def _write_rom(self, data: bytes) -> str:
        fd, path = tempfile.mkstemp(suffix=".ch8")
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        self.addCleanup(os.remove, path)
        return path

    def test_initial_ui_state(self):
        self.assertFalse(self.window.run_action.isEnabled())
        self.assertFalse(self.window.step_action.isEnabled())
        self.assertFalse(self.window.stop_action.isEnabled())
        self.assertEqual(self.window.register_view.text_of("PC"), "0x0200")

    def test_open_rom_and_step(self):
        path = self._write_rom(bytes([0x6A, 0x2F, 0x12, 0x02]))
        self.assertTrue(self.window.open_rom(path))
        self.assertTrue(self.window.stop_action.isEnabled())
        self.window._stop()
        self.window._step()
        self.assertEqual(self.window.register_view.text_of("VA"), "0x2F")
        self.assertEqual(self.window.register_view.text_of("PC"), "0x0202")

    def test_open_rom_failure_shows_warning(self):
        with patch.object(QMessageBox, "warning") as warning:
            self.assertFalse(self.window.open_rom("/nonexistent/rom.ch8"))
        warning.assert_called_once()
        self.assertFalse(self.window.session.loaded)

    def test_fatal_error_stops_emulation(self):
        path = self._write_rom(bytes([0x5A, 0xB1]))
        self.window.open_rom(path)
        with patch.object(QMessageBox, "critical") as critical:
            self.window._run_frame()
        critical.assert_called_once()
        self.assertTrue(self.window.session.halted)
        self.assertFalse(self.window.run_action.isEnabled())


class TestRegisterView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_update_registers(self):
        view = RegisterView()
        view.set_layout_info([RegisterLayoutInfo("G", [RegisterInfo("V0", 8), RegisterInfo("I", 16)])])
        view.update_registers({"V0": 0xA, "I": 0x123, "XX": 1})
        self.assertEqual(view.text_of("V0"), "0x0A")
        self.assertEqual(view.text_of("I"), "0x0123")


class TestCommandLine(unittest.TestCase):
    def test_arguments_override_defaults(self):
        args = build_parser().parse_args(["game.ch8", "--scale", "5", "--cpu-hz", "700", "-t"])
        config = resolve_config(args)
        self.assertEqual(config.rom, "game.ch8")
        self.assertEqual(config.display.scale, 5)
        self.assertEqual(config.cpu_hz, 700)
        self.assertTrue(config.trace)

    def test_invalid_arguments(self):
        with self.assertRaises(ConfigError):
            resolve_config(build_parser().parse_args(["--scale", "0"]))
        with self.assertRaises(ConfigError):
            resolve_config(build_parser().parse_args(["--cpu-hz", "-1"]))

if __name__ == '__main__':
    unittest.main()
