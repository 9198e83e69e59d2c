"""Helpers for mobile build tooling: paths, prompts, reports, versions, links and cargo arguments."""

__version__ = "0.1.0"
__all__ = ["cargo", "cli", "ln", "paths", "prompt", "text", "versions"]