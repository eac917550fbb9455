"""
Console output for chawuek.

All diagnostics go through a single console so that the token stream on
stdout stays clean when the CLI is used in a pipe.

Usage:
    from chawuek.utils import console

    console.info("Loading character map...")
    console.verbose("Detailed info...")  # Only shown in verbose mode

Configuration:
    Environment variables:
        CHAWUEK_VERBOSE=1      Enable verbose output
        CHAWUEK_QUIET=1        Suppress all non-error output
        CHAWUEK_NO_COLOR=1     Disable colored output
        CHAWUEK_FLUSH=1        Force flush after every print
"""

import os
import sys
import time
from typing import Optional, Dict, Any
from contextlib import contextmanager


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in ('1', 'true', 'yes')


class Console:
    """
    Centralized console output handler.

    Singleton-like design - import and use directly:
        from chawuek.utils import console
        console.info("message")
    """

    # ANSI color codes
    COLORS = {
        'reset': '\033[0m',
        'bold': '\033[1m',
        'red': '\033[0;31m',
        'green': '\033[0;32m',
        'yellow': '\033[0;33m',
        'blue': '\033[0;34m',
        'cyan': '\033[0;36m',
        'gray': '\033[0;90m',
    }

    def __init__(self):
        """Initialize console from environment variables."""
        self._verbose = False
        self._quiet = False
        self._use_color = True
        self._force_flush = False
        self._stream = None  # None means sys.stdout at print time

        self._load_env_config()

    def _load_env_config(self):
        """Load configuration from environment variables."""
        if _env_flag('CHAWUEK_VERBOSE'):
            self._verbose = True

        if _env_flag('CHAWUEK_QUIET'):
            self._quiet = True

        if _env_flag('CHAWUEK_NO_COLOR'):
            self._use_color = False

        if _env_flag('CHAWUEK_FLUSH'):
            self._force_flush = True

    # ================================================================
    # CONFIGURATION
    # ================================================================

    def configure(
            self,
            verbose: Optional[bool] = None,
            quiet: Optional[bool] = None,
            color: Optional[bool] = None,
            flush: Optional[bool] = None,
            stream=None
    ):
        """
        Configure console settings.

        Args:
            verbose: Enable verbose output
            quiet: Enable quiet mode
            color: Enable colored output
            flush: Enable force flush
            stream: Stream for non-error messages (default: stdout)
        """
        if verbose is not None:
            self._verbose = verbose
        if quiet is not None:
            self._quiet = quiet
        if color is not None:
            self._use_color = color
        if flush is not None:
            self._force_flush = flush
        if stream is not None:
            self._stream = stream
        return self

    @property
    def is_verbose(self) -> bool:
        """Check if verbose mode is enabled."""
        return self._verbose

    @property
    def is_quiet(self) -> bool:
        """Check if quiet mode is enabled."""
        return self._quiet

    # ================================================================
    # OUTPUT METHODS
    # ================================================================

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self._use_color and color in self.COLORS:
            return f"{self.COLORS[color]}{text}{self.COLORS['reset']}"
        return text

    def _print(self, message: str, color: Optional[str] = None, file=None):
        """Internal print with optional color and flush."""
        if file is None:
            file = self._stream if self._stream is not None else sys.stdout

        if color:
            message = self._colorize(message, color)

        print(message, file=file)

        if self._force_flush:
            file.flush()

    def info(self, message: str):
        """Print info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._print(f"[INFO]    {message}", 'blue')

    def success(self, message: str):
        """Print success message (suppressed in quiet mode)."""
        if not self._quiet:
            self._print(f"[SUCCESS] ✔ {message}", 'green')

    def warning(self, message: str):
        """Print warning message (always shown)."""
        self._print(f"[WARNING] ⚠ {message}", 'yellow')

    def error(self, message: str):
        """Print error message (always shown)."""
        self._print(f"[ERROR]   ✖ {message}", 'red', file=sys.stderr)

    def verbose(self, message: str):
        """Print verbose message (only in verbose mode)."""
        if self._verbose:
            self._print(f"[VERBOSE] {message}", 'gray')

    def section(self, title: str, width: int = 70):
        """Print subsection header."""
        if not self._quiet:
            self._print("")
            self._print(self._colorize(title, 'cyan'))
            self._print("-" * width)

    def table(self, data: Dict[str, Any], indent: int = 2, key_width: int = 30):
        """Print dictionary as aligned table."""
        if not self._quiet:
            spaces = " " * indent
            for key, value in data.items():
                if isinstance(value, float):
                    formatted = f"{value:.3f}"
                elif isinstance(value, int) and value > 1000:
                    formatted = f"{value:,}"
                else:
                    formatted = str(value)
                self._print(f"{spaces}{key:<{key_width}} {formatted}")

    @contextmanager
    def status(self, message: str):
        """
        Context manager for operations with status.

        Usage:
            with console.status("Loading classifier"):
                load()
        """
        self.info(f"{message}...")
        start = time.time()
        try:
            yield
            elapsed = time.time() - start
            self.success(f"{message} ({elapsed:.1f}s)")
        except Exception as e:
            elapsed = time.time() - start
            self.error(f"{message} failed ({elapsed:.1f}s): {e}")
            raise


# ================================================================
# GLOBAL INSTANCE
# ================================================================

console = Console()
