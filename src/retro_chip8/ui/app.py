# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
コマンドライン引数と設定ファイルを解釈し、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.common.errors import ConfigError
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import EmulatorConfig
from .main_window import MainWindow

# @intent:responsibility コマンドライン引数のパーサを構築します。
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", nargs="?", help="Path to a CHIP-8 ROM (.ch8)")
    parser.add_argument("--config", "-c", help="Path to a YAML config file")
    parser.add_argument("--scale", type=int, help="Display upscale ratio")
    parser.add_argument("--cpu-hz", type=int, help="Instructions executed per second")
    parser.add_argument("--trace", "-t", action="store_true", help="Print a per-step debug trace")
    return parser

# @intent:responsibility 設定ファイルとコマンドライン引数を統合した設定を返します。引数が優先されます。
def resolve_config(args: argparse.Namespace) -> EmulatorConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
    if args.rom:
        config.rom = args.rom
    if args.scale is not None:
        if args.scale <= 0:
            raise ConfigError(f"--scale must be positive: {args.scale}")
        config.display.scale = args.scale
    if args.cpu_hz is not None:
        if args.cpu_hz <= 0:
            raise ConfigError(f"--cpu-hz must be positive: {args.cpu_hz}")
        config.cpu_hz = args.cpu_hz
    if args.trace:
        config.trace = True
    return config

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = resolve_config(args)
    except ConfigError as e:
        parser.error(str(e))

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(config)
    main_win.show()
    if config.rom:
        main_win.open_rom(config.rom)
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
