from abc import ABC, abstractmethod

from scorelink.utils.exceptions import ConnectionClosedError


class Transport(ABC):
    @abstractmethod
    def write(self, data: bytes) -> int:
        pass

    @abstractmethod
    def read(self, size: int = 1) -> bytes:
        pass

    def read_exact(self, size: int) -> bytes:
        """Read exactly size bytes, blocking until they arrive."""
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self.read(remaining)
            if not chunk:
                received = size - remaining
                raise ConnectionClosedError(
                    f"Connection closed after {received} of {size} bytes"
                )
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    @abstractmethod
    def shutdown(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass
