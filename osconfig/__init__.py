"""OS detection, update filtering, reboot checks and test image helpers for Linux hosts."""

__version__ = "0.1.0"
__all__ = ["osinfo", "patching", "testimages"]