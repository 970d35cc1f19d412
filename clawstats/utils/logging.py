"""Rich console logging utilities."""

from rich.console import Console

# Global console instances; errors go to stderr so --json output stays clean
console = Console()
err_console = Console(stderr=True)


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"✅ {message}")


def error(message: str) -> None:
    """Print an error message, unwrapped so API bodies come through verbatim."""
    err_console.print(f"❌ {message}", style="red", highlight=False, markup=False, soft_wrap=True)


def warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"⚠️  {message}", style="yellow", highlight=False, markup=False, soft_wrap=True)


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"ℹ️  {message}", style="blue")
