"""I2C colour and motion sensor readings sent over UDP, with a server that reports statistics."""

__version__ = "0.1.0"
__all__ = ["__version__"]