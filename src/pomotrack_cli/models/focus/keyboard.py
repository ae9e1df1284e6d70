"""Non-blocking single-key input for the live timer."""

import sys

try:
    import termios
    import tty
except ImportError:  # Windows
    termios = None
    tty = None


class KeyboardHandler:
    """Reads one key at a time without waiting for Enter.

    Use as a context manager so the terminal mode is always restored::

        with KeyboardHandler() as keyboard:
            key = keyboard.get_key()
    """

    def __init__(self):
        self._fd: int | None = None
        self._old_settings = None
        self._msvcrt = None

    def __enter__(self) -> "KeyboardHandler":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def start(self) -> None:
        """Switch the terminal to cbreak mode (POSIX) or load msvcrt (Windows)."""
        if termios is None:
            import msvcrt

            self._msvcrt = msvcrt
            return

        if not sys.stdin.isatty():
            return
        self._fd = sys.stdin.fileno()
        self._old_settings = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)

    def get_key(self) -> str | None:
        """Return the pressed key (lower-cased) or None when nothing is waiting."""
        if self._msvcrt is not None:
            if not self._msvcrt.kbhit():
                return None
            key = self._msvcrt.getch()
            if isinstance(key, bytes):
                key = key.decode("utf-8", errors="ignore")
            return key.lower()

        if self._fd is None:
            return None

        import select

        if select.select([sys.stdin], [], [], 0)[0]:
            return sys.stdin.read(1).lower()
        return None

    def stop(self) -> None:
        """Restore terminal settings."""
        if self._fd is not None and self._old_settings is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)
        self._fd = None
        self._old_settings = None

    def suspend(self) -> None:
        """Give the terminal back before the process is stopped (Ctrl-Z)."""
        if self._fd is not None and self._old_settings is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)

    def restore(self) -> None:
        """Re-enter cbreak mode after the process is continued."""
        if self._fd is not None:
            tty.setcbreak(self._fd)
