"""Read, edit and write Rockchip CFG partition configuration files."""

__version__ = "1.0.0"
__all__ = ["__version__"]