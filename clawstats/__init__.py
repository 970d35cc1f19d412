"""claw-stats: GitHub stars, forks and progress for an account."""

__version__ = "1.0.0"
