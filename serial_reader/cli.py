"""
cli.py – print the output of a serial device, optionally copying it to a file

Usage examples
--------------
List ports :  serial-reader
Windows    :  serial-reader --port 2                  # default 9600 baud
Linux      :  serial-reader --port 1 --baud 115200 --log_file boot.log
"""

import argparse
import sys
import threading
from typing import List, Optional

from .errors import (CloseFailed, EnumerationFailed, FileCreateFailed,
                     InvalidSelection, PortOpenFailed)
from .ports import list_ports, print_port_options, select_port
from .stream import (DEFAULT_BAUD, READ_TIMEOUT, InterruptListener, open_port,
                     stream)
from .tee import LogWriter, say


# ─────────────────────────────― ARGUMENT PARSER ―─────────────────────────── #
def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"{text} is not a positive integer")
    return value


def positive_float(text: str) -> float:
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"{text} is not a positive number")
    return value


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="serial-reader",
        description="Print the output of a serial device to stdout")
    ap.add_argument("--port", type=int, default=0,
                    help="The selected serial port (1-based, as listed)")
    ap.add_argument("--baud", type=positive_int, default=DEFAULT_BAUD,
                    help=f"The port's baud rate (default {DEFAULT_BAUD})")
    ap.add_argument("--log_file", default="",
                    help="An optional name for a file to which serial output "
                         "will be copied. (It will still be printed to stdout.)")
    ap.add_argument("--timeout", type=positive_float, default=READ_TIMEOUT,
                    help="Read timeout in seconds; also the longest wait "
                         f"after Ctrl-C (default {READ_TIMEOUT})")
    return ap.parse_args(argv)


# ─────────────────────────────────― RUN ―─────────────────────────────────── #
def run(argv: Optional[List[str]] = None) -> int:
    """Everything main() does, returning the exit status instead of exiting."""
    args = parse_args(argv)

    try:
        ports = list_ports()
    except EnumerationFailed as e:
        print(f"Failed getting list of serial ports: {e}")
        return 1
    if not ports:
        print("No serial devices were found.")
        return 0
    try:
        port_name = select_port(ports, args.port)
    except InvalidSelection:
        print_port_options(ports)
        return 1

    try:
        output = (LogWriter.create(args.log_file) if args.log_file
                  else LogWriter())
    except FileCreateFailed as e:
        print(f"Error establishing log file: {e}")
        return 1

    try:
        with output:
            return read_port(port_name, args, output)
    except CloseFailed as e:
        say(str(e))
        return 1


def read_port(port_name: str, args: argparse.Namespace, output: LogWriter) -> int:
    try:
        port = open_port(port_name, args.baud, args.timeout)
    except PortOpenFailed as e:
        print(f"Failed opening serial port {port_name}: {e}")
        return 1
    with port:
        cancel = threading.Event()
        with InterruptListener(cancel, port_name) as listener:
            print(f"Reading from device {port_name}. "
                  "Press ctrl+C to quit.", flush=True)
            return stream(port, output, cancel, port_name, listener)


def main() -> None:
    sys.exit(run())
