"""
stream.py – poll an open serial port and forward whatever arrives

  · the port is read with a bounded timeout so a silent device never
    blocks the loop for longer than one timeout interval
  · Ctrl-C only sets a flag; the read in flight is allowed to finish
  · a failed read ends the run, there is no reconnect
"""

import signal
import threading
from typing import Optional

import serial                       # pip install pyserial

from .errors import PortOpenFailed
from .tee import LogWriter, say

# ───────────────────────── CONFIGURABLE PARAMETERS ────────────────────────── #
DEFAULT_BAUD = 9600
READ_TIMEOUT = 0.5                  # seconds per read, bounds Ctrl-C latency
READ_SIZE    = 512                  # max bytes forwarded per read


# ───────────────────────────────── PORT ───────────────────────────────────── #
def open_port(name: str, baud: int = DEFAULT_BAUD,
              timeout: float = READ_TIMEOUT) -> serial.Serial:
    """Open *name* as 8N1 at *baud* with a bounded read timeout."""
    try:
        return serial.Serial(
            port=name,
            baudrate=baud,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=timeout,
        )
    except (serial.SerialException, ValueError) as e:
        raise PortOpenFailed(str(e)) from e


def read_chunk(port: serial.Serial, size: int = READ_SIZE) -> bytes:
    """
    Wait up to the port timeout for one byte, then take whatever else is
    already buffered (never more than *size* in total).
    Returns b"" when the timeout elapses with no data.
    """
    data = port.read(1)
    if not data:
        return data
    waiting = min(port.in_waiting, size - 1)
    if waiting > 0:
        data += port.read(waiting)
    return data


# ─────────────────────────────── INTERRUPT ────────────────────────────────── #
class InterruptListener:
    """
    One-shot SIGINT handler: the first interrupt sets *cancel* and announces
    itself, anything after that is ignored until close() restores the
    previous handler. disable() ignores SIGINT outright for the rest of
    the run.
    """

    def __init__(self, cancel: threading.Event, port_name: str):
        self.cancel = cancel
        self.port_name = port_name
        self.fired = False
        self._previous = None
        self._installed = False

    def start(self) -> None:
        self._previous = signal.signal(signal.SIGINT, self._handle)
        self._installed = True

    def _handle(self, signum, frame) -> None:
        if self.fired:
            return
        self.fired = True
        self.cancel.set()
        say(f"Signal {signal.Signals(signum).name} pressed on "
            f"{self.port_name}. Exiting after next read...")

    def disable(self) -> None:
        if self._installed:
            signal.signal(signal.SIGINT, signal.SIG_IGN)

    def close(self) -> None:
        if not self._installed:
            return
        self._installed = False
        signal.signal(signal.SIGINT, self._previous)

    def __enter__(self) -> "InterruptListener":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.close()


# ─────────────────────────────── MAIN LOOP ────────────────────────────────── #
def stream(port: serial.Serial, output: LogWriter, cancel: threading.Event,
           port_name: str, listener: Optional[InterruptListener] = None,
           size: int = READ_SIZE) -> int:
    """
    Copy reads from *port* into *output* until *cancel* is set (returns 0)
    or a read/write fails (reports it and returns 1).
    """
    def fail(message: str) -> int:
        cancel.set()
        if listener is not None:
            listener.disable()
        say(message)
        return 1

    while not cancel.is_set():
        try:
            data = read_chunk(port, size)
        except (serial.SerialException, OSError) as e:
            return fail(f"Failed reading from {port_name}: {e}")
        if not data:
            continue
        try:
            output.write(data)
        except OSError as e:
            return fail(f"Failed writing output from {port_name}: {e}")
    return 0
