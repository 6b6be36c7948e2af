"""
エラー定義モジュール。

コアが検出する致命的エラー（実行時）と、ホストアダプタが扱うロード時エラーを定義します。
"""
from typing import Optional


# @intent:responsibility 本パッケージが送出する全ての例外の基底クラスです。
class Chip8Error(Exception):
    pass


# @intent:responsibility 35命令のいずれにも一致しないオペコードを検出したことを示します。
# @intent:rationale セッションを継続できない致命的エラー。診断のため生のオペコード値を保持します。
class UndefinedOpcode(Chip8Error):
    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        self.address = address
        where = f" at {address:#05x}" if address is not None else ""
        super().__init__(f"Undefined opcode {opcode:#06x}{where}")


# @intent:responsibility サブルーチン呼び出しのネストがスタック容量を超えたことを示します。
class StackOverflow(Chip8Error):
    pass


# @intent:responsibility 空のスタックからの復帰が試みられたことを示します。
class StackUnderflow(Chip8Error):
    pass


# @intent:responsibility ROMロード時エラーの基底クラス。ホストアダプタの境界でのみ発生します。
class RomLoadError(Chip8Error):
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class RomTooLarge(RomLoadError):
    def __init__(self, path: str, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(path, f"ROM '{path}' is {size} bytes; the limit is {limit} bytes")


class RomNotFound(RomLoadError):
    def __init__(self, path: str):
        super().__init__(path, f"ROM file not found: {path}")


class RomReadError(RomLoadError):
    def __init__(self, path: str, reason: str):
        super().__init__(path, f"Could not read ROM '{path}': {reason}")


# @intent:responsibility 設定ファイルの内容が不正であることを示します。
class ConfigError(Chip8Error):
    pass
