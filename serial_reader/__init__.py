"""
serial_reader – print (and optionally log) the raw output of a serial device
"""

__version__ = "0.1.0"
