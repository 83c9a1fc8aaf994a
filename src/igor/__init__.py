"""
Igor: NVIDIA Driver Installation Wizard

Interactive terminal wizard that walks through GPU detection,
driver selection and installation.
"""

try:
    from importlib.metadata import version
    __version__ = version("igor-tui")
except Exception:
    __version__ = "0.0.0"  # Fallback for development

__all__ = ["__version__"]
