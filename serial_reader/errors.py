"""Failures reported by serial-reader before or while streaming."""


class SerialReaderError(Exception):
    pass


class EnumerationFailed(SerialReaderError):
    """The platform could not list its serial ports."""


class InvalidSelection(SerialReaderError):
    """The --port index is unset or outside the listed ports."""

    def __init__(self, index: int, count: int):
        super().__init__(f"port {index} is not between 1 and {count}")
        self.index = index
        self.count = count


class PortOpenFailed(SerialReaderError):
    pass


class FileCreateFailed(SerialReaderError):
    pass


class CloseFailed(SerialReaderError):
    pass
