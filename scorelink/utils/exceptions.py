class ScorelinkException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


class CodecError(ScorelinkException):
    pass


class UsageError(CodecError):
    pass


class UnsupportedTypeError(CodecError):
    pass


class BufferTooShortError(CodecError):
    pass


class ValueOutOfRangeError(CodecError):
    pass


class TransportError(ScorelinkException):
    pass


class ConnectionClosedError(TransportError):
    pass


class ProtocolError(ScorelinkException):
    pass


class CLIError(ScorelinkException):
    pass


class ValidationError(CLIError):
    pass
