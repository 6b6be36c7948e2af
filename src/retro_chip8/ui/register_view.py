# src/retro_chip8/ui/register_view.py
"""
CPUのレジスタを表示する汎用ウィジェット。
AbstractCpuのレイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, List

from PySide6.QtWidgets import QWidget, QVBoxLayout, QFormLayout, QLabel, QGroupBox
from PySide6.QtGui import QFontDatabase
from PySide6.QtCore import Qt

from retro_chip8.common.types import RegisterLayoutInfo, RegisterMap

# @intent:responsibility CPUのレジスタ値を表示するUIウィジェットを提供します。
class RegisterView(QWidget):
    """
    レジスタ状態を表示するウィジェット。
    レイアウト情報に基づいてフィールドを生成し、Snapshotのレジスタ辞書で値を更新します。
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
        self._register_labels: Dict[str, QLabel] = {}
        self._register_widths: Dict[str, int] = {}

    # @intent:responsibility レイアウト情報に基づいてUIを構築します。
    def set_layout_info(self, layout_info: List[RegisterLayoutInfo]) -> None:
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._register_labels.clear()
        self._register_widths.clear()

        for group in layout_info:
            group_box = QGroupBox(group.group_name)
            group_box.setStyleSheet("QGroupBox { font-weight: bold; color: #EEE; } QGroupBox::title { color: #00AAAA; }")
            group_layout = QFormLayout(group_box)
            group_layout.setLabelAlignment(Qt.AlignLeft)
            group_layout.setSpacing(3)

            for reg in group.registers:
                hex_width = (reg.width + 3) // 4  # 16bit -> 4chars, 8bit -> 2chars
                self._register_widths[reg.name] = hex_width

                label_value = QLabel(f"0x{'0' * hex_width}")
                label_value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
                label_value.setAlignment(Qt.AlignRight)

                group_layout.addRow(QLabel(f"{reg.name}:"), label_value)
                self._register_labels[reg.name] = label_value

            self._layout.addWidget(group_box)

        self._layout.addStretch()

    # @intent:responsibility レジスタの表示値を更新します。
    def update_registers(self, registers: RegisterMap) -> None:
        for name, value in registers.items():
            if name in self._register_labels:
                width = self._register_widths[name]
                self._register_labels[name].setText(f"0x{value:0{width}X}")

    def text_of(self, name: str) -> str:
        return self._register_labels[name].text()
