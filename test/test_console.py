import struct
import sys
import unittest
from unittest.mock import MagicMock, patch

from termbg.base import Rgb, TerminalIOError, Unsupported
from termbg.console import attributes_to_rgb, from_console


class TestAttributesToRgb(unittest.TestCase):
    def test_background_nibble(self):
        test_cases = [
            (0x00, (0, 0, 0)),
            (0x07, (0, 0, 0)),  # foreground bits are ignored
            (0x10, (0, 0, 128)),
            (0x20, (0, 128, 0)),
            (0x40, (128, 0, 0)),
            (0x70, (192, 192, 192)),
            (0x80, (128, 128, 128)),
            (0x90, (0, 0, 255)),
            (0xC0, (255, 0, 0)),
            (0xF0, (255, 255, 255)),
            (0xF7, (255, 255, 255)),
        ]
        for attributes, expected in test_cases:
            with self.subTest(attributes=hex(attributes)):
                self.assertEqual(attributes_to_rgb(attributes), Rgb.from_8bit(*expected))


class TestFromConsole(unittest.TestCase):
    def test_unsupported_off_windows(self):
        with patch('termbg.console.os') as mock_os:
            mock_os.name = 'posix'
            with self.assertRaises(Unsupported):
                from_console()

    def fake_ctypes(self, attributes: int, succeeds: bool = True) -> MagicMock:
        fake = MagicMock()
        fake.create_string_buffer.return_value.raw = struct.pack("hhhhHhhhhhh", 120, 9001, 0, 42, attributes, 0, 0, 119, 29, 120, 30)
        fake.windll.kernel32.GetConsoleScreenBufferInfo.return_value = 1 if succeeds else 0
        return fake

    def test_windows_console(self):
        with patch('termbg.console.os') as mock_os, patch.dict(sys.modules, {'ctypes': self.fake_ctypes(0x70)}):
            mock_os.name = 'nt'
            self.assertEqual(from_console(), Rgb.from_8bit(192, 192, 192))

    def test_not_a_console(self):
        with patch('termbg.console.os') as mock_os, patch.dict(sys.modules, {'ctypes': self.fake_ctypes(0, succeeds=False)}):
            mock_os.name = 'nt'
            with self.assertRaises(TerminalIOError):
                from_console()


if __name__ == '__main__':
    unittest.main()
