"""Tools for scanning, reading, writing and dumping registers of I2C devices on a simulated bus."""

__version__ = "1.0.0"