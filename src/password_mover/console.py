"""
Colored status lines for the terminal.
"""

from colorama import Fore, Style, just_fix_windows_console


def enable_colors() -> None:
    """Make ANSI colors work on Windows consoles; no-op elsewhere."""
    just_fix_windows_console()


def print_heading(message: str) -> None:
    """Print a bold status line."""
    print(f"{Style.BRIGHT}{message}{Style.RESET_ALL}")


def print_notice(message: str) -> None:
    """Print a yellow informational line."""
    print(f"{Fore.YELLOW}{message}{Style.RESET_ALL}")


def print_error(message: str) -> None:
    """Print a red error line."""
    print(f"{Fore.RED}{message}{Style.RESET_ALL}")
