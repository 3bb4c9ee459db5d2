"""CLI output utilities and formatting."""

from colorama import Fore, Style

BANNER = f"""
{Fore.YELLOW}╔══════════════════════════════════════╗{Style.RESET_ALL}
{Fore.YELLOW}║{Style.RESET_ALL}   {Fore.CYAN}{Style.BRIGHT}kit{Style.RESET_ALL}  content-addressed version control {Fore.YELLOW}║{Style.RESET_ALL}
{Fore.YELLOW}╚══════════════════════════════════════╝{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def short(commit_hash) -> str:
    """Abbreviate a hash for display."""
    return commit_hash[:7] if commit_hash else '(none)'
