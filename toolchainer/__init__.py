"""Parts of a toolchain installer: downloads, progress display, prompts, terminal output and help texts."""

__version__ = "1.20.2"