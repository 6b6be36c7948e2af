"""
retro_chip8

CHIP-8仮想CPUのエミュレーションコアと、その周辺（ROMローダー、設定、ホストアダプタ、UI）を提供するパッケージ。
"""
__version__ = "0.1.0"
