import unittest

from retro_chip8.core.snapshot import ExecutionState
from retro_chip8.arch.chip8.state import GLYPH_SIZE
from chip8_helpers import make_cpu, run_opcode

class TestChip8LoadInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = make_cpu()
        self.state = self.cpu.get_state()

    def test_ld_i(self):
        run_opcode(self.cpu, 0xA123)
        self.assertEqual(self.state.index_register, 0x123)
        self.assertEqual(self.state.pc, 0x202)

    def test_add_i(self):
        self.state.index_register = 0x100
        self.state.registers[0x2] = 0x20
        run_opcode(self.cpu, 0xF21E)
        self.assertEqual(self.state.index_register, 0x120)

    def test_bcd(self):
        self.state.index_register = 0x300
        self.state.registers[0x1] = 157
        run_opcode(self.cpu, 0xF133)
        self.assertEqual(list(self.state.memory[0x300:0x303]), [1, 5, 7])

        self.state.registers[0x1] = 9
        run_opcode(self.cpu, 0xF133)
        self.assertEqual(list(self.state.memory[0x300:0x303]), [0, 0, 9])

        self.state.registers[0x1] = 255
        run_opcode(self.cpu, 0xF133)
        self.assertEqual(list(self.state.memory[0x300:0x303]), [2, 5, 5])

    def test_font_glyph_address(self):
        self.state.registers[0x4] = 0xA
        run_opcode(self.cpu, 0xF429)
        self.assertEqual(self.state.index_register, 0xA * GLYPH_SIZE)
        # 上位ニブルは無視される
        self.state.registers[0x4] = 0x3B
        run_opcode(self.cpu, 0xF429)
        self.assertEqual(self.state.index_register, 0xB * GLYPH_SIZE)

    def test_font_is_installed(self):
        self.assertEqual(list(self.state.memory[0:5]), [0xF0, 0x90, 0x90, 0x90, 0xF0])
        self.assertEqual(list(self.state.memory[75:80]), [0xF0, 0x80, 0xF0, 0x80, 0x80])

    def test_store_registers(self):
        for i in range(4):
            self.state.registers[i] = 0x10 + i
        self.state.registers[4] = 0xEE
        self.state.index_register = 0x300
        run_opcode(self.cpu, 0xF355)
        self.assertEqual(list(self.state.memory[0x300:0x305]), [0x10, 0x11, 0x12, 0x13, 0x00])
        self.assertEqual(self.state.index_register, 0x304)

    def test_load_registers(self):
        self.state.memory[0x300:0x303] = bytes([0xAA, 0xBB, 0xCC])
        self.state.registers[3] = 0x77
        self.state.index_register = 0x300
        run_opcode(self.cpu, 0xF265)
        self.assertEqual(self.state.registers[0:4], [0xAA, 0xBB, 0xCC, 0x77])
        self.assertEqual(self.state.index_register, 0x303)

    def test_store_then_load_round_trip(self):
        values = [(i * 17) & 0xFF for i in range(16)]
        self.state.registers[:] = values
        self.state.index_register = 0x400
        run_opcode(self.cpu, 0xFF55)
        self.state.registers[:] = [0] * 16
        self.state.index_register = 0x400
        run_opcode(self.cpu, 0xFF65)
        self.assertEqual(self.state.registers, values)

    def test_timer_registers(self):
        self.state.registers[0x1] = 30
        run_opcode(self.cpu, 0xF115)
        self.assertEqual(self.state.delay_timer, 30)
        run_opcode(self.cpu, 0xF118)
        self.assertEqual(self.state.sound_timer, 30)

        self.state.delay_timer = 12
        run_opcode(self.cpu, 0xF207)
        self.assertEqual(self.state.registers[0x2], 12)

    def test_wait_for_key_suspends_without_advancing(self):
        snapshot = run_opcode(self.cpu, 0xF50A)
        self.assertEqual(self.state.pc, 0x200)
        self.assertIs(snapshot.execution_state, ExecutionState.AWAITING_KEY)
        self.assertIs(self.cpu.execution_state, ExecutionState.AWAITING_KEY)

        # キーが無い間はフェッチもしない
        count = snapshot.metadata.instruction_count
        snapshot = self.cpu.step()
        self.assertIsNone(snapshot.operation)
        self.assertEqual(snapshot.metadata.instruction_count, count)
        self.assertEqual(self.state.pc, 0x200)

    def test_wait_for_key_completes_when_key_pressed(self):
        run_opcode(self.cpu, 0xF50A)
        self.cpu.set_pressed_key(0x7)
        snapshot = self.cpu.step()
        self.assertEqual(snapshot.operation.mnemonic, "LD")
        self.assertEqual(self.state.registers[0x5], 0x7)
        self.assertEqual(self.state.pc, 0x202)
        self.assertIs(self.cpu.execution_state, ExecutionState.RUNNING)

if __name__ == '__main__':
    unittest.main()
