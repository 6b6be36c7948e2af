# src/retro_chip8/ui/display_view.py
"""
フレームバッファ表示ウィジェット。
64x32のモノクロフレームバッファを指定倍率で描画します。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QColor, QImage, QPainter

from retro_chip8.arch.chip8.state import DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:responsibility フレームバッファの内容をQImageに変換します。
def framebuffer_to_image(framebuffer: bytes, foreground: QColor, background: QColor) -> QImage:
    image = QImage(DISPLAY_WIDTH, DISPLAY_HEIGHT, QImage.Format_RGB32)
    fg = foreground.rgb()
    bg = background.rgb()
    for y in range(DISPLAY_HEIGHT):
        row = y * DISPLAY_WIDTH
        for x in range(DISPLAY_WIDTH):
            image.setPixel(x, y, fg if framebuffer[row + x] else bg)
    return image

# @intent:responsibility フレームバッファを拡大表示するウィジェット。
class DisplayView(QWidget):
    """
    ホストから渡されたフレームバッファのコピーを描画します。
    ウィジェット自身はCPU状態を参照せず、update_frame()で渡された内容のみを表示します。
    """
    def __init__(self, scale: int = 10, foreground: str = "#FFFFFF", background: str = "#000000", parent=None):
        super().__init__(parent)
        self._scale = scale
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._image: Optional[QImage] = None
        self.setFixedSize(self.sizeHint())
        self.setFocusPolicy(Qt.StrongFocus)

    def sizeHint(self) -> QSize:
        return QSize(DISPLAY_WIDTH * self._scale, DISPLAY_HEIGHT * self._scale)

    @property
    def image(self) -> Optional[QImage]:
        return self._image

    # @intent:responsibility 新しいフレームを受け取り、再描画を要求します。
    def update_frame(self, framebuffer: bytes) -> None:
        self._image = framebuffer_to_image(framebuffer, self._foreground, self._background)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        if self._image is None:
            painter.fillRect(self.rect(), self._background)
        else:
            # 拡大時に画素をぼかさない
            painter.setRenderHint(QPainter.SmoothPixmapTransform, False)
            painter.drawImage(self.rect(), self._image)
        painter.end()
