"""
ports.py – find serial ports and resolve the user's 1-based choice
"""

from typing import List, Sequence

import serial                       # pip install pyserial
import serial.tools.list_ports

from .errors import EnumerationFailed, InvalidSelection


def list_ports() -> List[str]:
    """
    Query the platform for its serial ports, every call.
    Order is whatever comports() reports; nothing is sorted here.
    """
    try:
        return [p.device for p in serial.tools.list_ports.comports()]
    except (OSError, serial.SerialException) as e:
        raise EnumerationFailed(str(e)) from e


def select_port(ports: Sequence[str], index: int) -> str:
    """Map a 1-based index onto *ports*; 0 means nothing was selected."""
    if index < 1 or index > len(ports):
        raise InvalidSelection(index, len(ports))
    return ports[index - 1]


def print_port_options(ports: Sequence[str]) -> None:
    print("You must select a valid serial port. Options:")
    for i, name in enumerate(ports, start=1):
        print(f" {i}: {name}")
    print('Run with "--help" for more information.')
