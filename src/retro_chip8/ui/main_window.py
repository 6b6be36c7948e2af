# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
フレームバッファ表示、レジスタインスペクタ、メニュー、実行制御を保持し、
60Hzのタイマーでセッションを駆動します。
"""
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QDockWidget, QToolBar, QFileDialog, QMessageBox, QApplication
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.common.errors import Chip8Error
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.arch.chip8.timers import TIMER_HZ
from retro_chip8.host.session import Chip8Session
from .display_view import DisplayView
from .register_view import RegisterView

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    セッションの唯一の駆動元であり、step()は全てこのウィンドウのイベントループ（単一スレッド）から呼ばれます。
    """
    def __init__(self, config: Optional[EmulatorConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self._config = config if config is not None else EmulatorConfig()
        self.session = Chip8Session(self._config)
        self.setWindowTitle("CHIP-8 Interpreter")

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(round(1000 / TIMER_HZ))
        self._frame_timer.timeout.connect(self._run_frame)

        self._create_display()
        self._create_status_inspector()
        self._create_toolbar()
        self._create_menus()
        self._update_ui_state(False)

    # @intent:responsibility 中央にフレームバッファ表示を配置します。
    def _create_display(self):
        display = self._config.display
        self.display_view = DisplayView(display.scale, display.foreground, display.background)
        self.setCentralWidget(self.display_view)
        self.display_view.update_frame(self.session.framebuffer())

    # @intent:responsibility 右側にレジスタインスペクタを作成します。
    def _create_status_inspector(self):
        dock = QDockWidget("Registers", self)
        dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_layout_info(self.session.cpu.get_register_layout())
        self.register_view.update_registers(self.session.cpu.get_register_map())
        dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Emulation")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self._run)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self._stop)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset)
        toolbar.addAction(self.reset_action)

    # @intent:responsibility メニューバーを作成し、ROMを開く・終了するアクションを追加します。
    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.open_action = QAction("Open ROM...", self)
        self.open_action.setShortcut("Ctrl+O")
        self.open_action.triggered.connect(self._open_rom_dialog)
        file_menu.addAction(self.open_action)

        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

    # @intent:responsibility 実行状態に応じてUIコンポーネントの有効/無効を切り替えます。
    def _update_ui_state(self, is_running: bool):
        can_run = self.session.loaded and not self.session.halted
        self.run_action.setEnabled(can_run and not is_running)
        self.step_action.setEnabled(can_run and not is_running)
        self.stop_action.setEnabled(is_running)
        self.reset_action.setEnabled(self.session.loaded)

    # @intent:responsibility ROMをロードし、成功すれば実行を開始します。失敗時は現在のセッションを維持して通知します。
    def open_rom(self, path: str) -> bool:
        self._frame_timer.stop()
        result = self.session.open_rom(path)
        if not result.ok:
            QMessageBox.warning(self, "Open ROM", result.message)
            self._update_ui_state(False)
            return False
        self.setWindowTitle(f"CHIP-8 Interpreter - {path}")
        self._refresh_views()
        self._run()
        return True

    @Slot()
    def _open_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Select your preferred ROM", "", "Chip8 Roms (*.ch8);;All Files (*)")
        if file_name:
            self.open_rom(file_name)

    @Slot()
    def _run(self):
        if not self.session.loaded or self.session.halted:
            return
        self._frame_timer.start()
        self._update_ui_state(True)

    @Slot()
    def _stop(self):
        self._frame_timer.stop()
        self._update_ui_state(False)

    @Slot()
    def _step(self):
        try:
            self.session.step()
        except Chip8Error as e:
            self._report_fatal(e)
        self._refresh_views()

    @Slot()
    def _reset(self):
        self.session.reset()
        self._refresh_views()
        self._update_ui_state(self._frame_timer.isActive())

    # @intent:responsibility 1フレーム分の実行と画面更新を行います。
    @Slot()
    def _run_frame(self):
        try:
            self.session.run_frame()
        except Chip8Error as e:
            self._report_fatal(e)
        self._refresh_views()

    # @intent:responsibility コアの致命的エラーでセッションを停止し、ユーザーに通知します。
    def _report_fatal(self, error: Chip8Error):
        self._frame_timer.stop()
        self._update_ui_state(False)
        QMessageBox.critical(self, "Emulation halted", str(error))

    def _refresh_views(self):
        self.display_view.update_frame(self.session.framebuffer())
        self.register_view.update_registers(self.session.cpu.get_register_map())

    # --- キー入力 ---
    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat() or not event.text():
            super().keyPressEvent(event)
            return
        if not self.session.key_down(event.text()):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat() or not event.text():
            super().keyReleaseEvent(event)
            return
        if not self.session.key_up(event.text()):
            super().keyReleaseEvent(event)

    # @intent:responsibility ウィンドウが閉じられる際にフレームタイマーを停止します。
    def closeEvent(self, event: QCloseEvent):
        self._frame_timer.stop()
        event.accept()


if __name__ == '__main__':
    import sys
    app = QApplication(sys.argv)
    main_win = MainWindow()
    main_win.show()
    sys.exit(app.exec())
