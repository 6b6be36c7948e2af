# retro_chip8/loader/rom_loader.py
"""
ROMローダーモジュール。

CHIP-8のROMイメージ（生のバイト列）をファイルから読み込みます。
ロード時のエラーはここで検出し、コアには部分的なROMが渡らないようにします。
"""
import os

from retro_chip8.common.errors import RomNotFound, RomReadError, RomTooLarge
from retro_chip8.arch.chip8.state import MAX_PROGRAM_SIZE

class RomLoader:
    """
    ROMファイルを検証しながら読み込むローダー。
    """
    def __init__(self, max_size: int = MAX_PROGRAM_SIZE):
        self._max_size = max_size

    # @intent:responsibility ROMファイルを読み込み、その内容を返します。
    # @intent:post-condition 返されるバイト列の長さはmax_size以下です。
    def load_rom(self, file_path: str) -> bytes:
        if not os.path.isfile(file_path):
            raise RomNotFound(file_path)

        try:
            with open(file_path, 'rb') as f:
                # 上限+1バイトまで読めば超過を判定できる
                data = f.read(self._max_size + 1)
                if len(data) > self._max_size:
                    size = os.fstat(f.fileno()).st_size
                    raise RomTooLarge(file_path, size, self._max_size)
        except FileNotFoundError:
            raise RomNotFound(file_path)
        except OSError as e:
            raise RomReadError(file_path, e.strerror or str(e))

        return data
