import os
import unittest
from unittest.mock import patch

from termbg.base import NotATerminal, RestoreError, Unsupported
from termbg import rawmode
from termbg.rawmode import RawMode

try:
    import termios
except ImportError:
    termios = None  # type: ignore[assignment]


@unittest.skipIf(termios is None, "requires termios")
class TestRawMode(unittest.TestCase):
    def setUp(self):
        self.master, self.slave = os.openpty()
        self.stdin = open(self.slave, 'rb', buffering=0, closefd=False)
        self.stdout = open(self.slave, 'wb', buffering=0, closefd=False)

    def tearDown(self):
        self.stdin.close()
        self.stdout.close()
        os.close(self.master)
        os.close(self.slave)

    def test_enter_and_restore(self):
        before = termios.tcgetattr(self.slave)
        self.assertTrue(before[3] & termios.ECHO)
        with RawMode(self.stdin, self.stdout) as session:
            self.assertTrue(session.active)
            raw = termios.tcgetattr(self.slave)
            self.assertFalse(raw[3] & (termios.ECHO | termios.ICANON | termios.ISIG))
        self.assertFalse(session.active)
        self.assertEqual(termios.tcgetattr(self.slave), before)

    def test_restore_on_error(self):
        before = termios.tcgetattr(self.slave)
        with self.assertRaises(KeyError):
            with RawMode(self.stdin, self.stdout):
                raise KeyError('boom')
        self.assertEqual(termios.tcgetattr(self.slave), before)

    def test_release_is_idempotent(self):
        session = RawMode(self.stdin, self.stdout).acquire()
        session.release()
        session.release()
        self.assertFalse(session.active)
        # The lock was released exactly once, so a new session can start
        with RawMode(self.stdin, self.stdout):
            pass

    def test_nested_session(self):
        with RawMode(self.stdin, self.stdout):
            with self.assertRaises(RuntimeError):
                RawMode(self.stdin, self.stdout).acquire()

    def test_not_a_terminal(self):
        read_fd, write_fd = os.pipe()
        try:
            with open(read_fd, 'rb', buffering=0, closefd=False) as stdin:
                with self.assertRaises(NotATerminal):
                    RawMode(stdin, self.stdout).acquire()
        finally:
            os.close(read_fd)
            os.close(write_fd)
        # A failed acquire leaves no session behind
        with RawMode(self.stdin, self.stdout):
            pass

    def test_restore_failure(self):
        session = RawMode(self.stdin, self.stdout).acquire()
        with patch('termios.tcsetattr', side_effect=termios.error(5, 'Input/output error')):
            with self.assertRaises(RestoreError):
                session.release()
        with RawMode(self.stdin, self.stdout):
            pass

    def test_restore_failure_replaces_other_errors(self):
        with patch('termios.tcsetattr', side_effect=termios.error(5, 'Input/output error')):
            with self.assertRaises(RestoreError) as cm:
                with RawMode(self.stdin, self.stdout):
                    raise ValueError('query failed')
        self.assertIsInstance(cm.exception.__cause__, termios.error)
        self.assertIsInstance(cm.exception.__cause__.__context__, ValueError)


class TestRawModeWithoutTermios(unittest.TestCase):
    def setUp(self):
        self.read_fd, self.write_fd = os.pipe()
        self.stdin = open(self.read_fd, 'rb', buffering=0, closefd=False)
        self.stdout = open(self.write_fd, 'wb', buffering=0, closefd=False)

    def tearDown(self):
        self.stdin.close()
        self.stdout.close()
        os.close(self.read_fd)
        os.close(self.write_fd)

    def test_unsupported(self):
        with patch.object(rawmode, 'termios', None), patch.object(rawmode, 'is_interactive', return_value=True):
            with self.assertRaises(Unsupported):
                RawMode(self.stdin, self.stdout).acquire()

    def test_redirected_streams(self):
        with patch.object(rawmode, 'termios', None):
            with self.assertRaises(NotATerminal):
                RawMode(self.stdin, self.stdout).acquire()


if __name__ == '__main__':
    unittest.main()
