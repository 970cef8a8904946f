"""A growable byte buffer with hex conversion, slicing helpers and ordering."""

from __future__ import annotations

from typing import Iterator, Union

BytesLike = Union["Bytes", bytes, bytearray, memoryview, str, None]


def _raw(data: BytesLike) -> bytes:
    """Return the raw bytes held by any accepted input type."""
    if data is None:
        return b""
    if isinstance(data, Bytes):
        return bytes(data._data)
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    raise TypeError(f"cannot convert {type(data).__name__} to Bytes")


class Bytes:
    """Mutable sequence of bytes.

    Copies are independent: building a ``Bytes`` from another one never
    lets a later change to one of them show in the other.
    """

    __slots__ = ("_data", "_capacity")

    def __init__(self, data: BytesLike = None, capacity: int = 0) -> None:
        self._data = bytearray(_raw(data))
        self._capacity = 0
        self.reserve(max(capacity, len(self._data)))

    # -- construction helpers -------------------------------------------

    @classmethod
    def from_hex(cls, hex_text: str) -> "Bytes":
        """Build a buffer from a hex string (upper or lower case)."""
        result = cls()
        result.assign_hex(hex_text)
        return result

    # -- size and capacity ----------------------------------------------

    @property
    def capacity(self) -> int:
        """The reserved capacity, never below the current size."""
        return max(self._capacity, len(self._data))

    def reserve(self, capacity: int) -> None:
        """Reserve room for at least ``capacity`` bytes."""
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = max(self._capacity, capacity)

    def clear(self) -> None:
        """Drop all content and any reserved capacity."""
        self._data = bytearray()
        self._capacity = 0

    def resize(self, new_size: int) -> None:
        """Truncate, or grow with zero bytes, to ``new_size`` bytes."""
        if new_size < 0:
            raise ValueError("size must not be negative")
        current = len(self._data)
        if new_size < current:
            del self._data[new_size:]
        elif new_size > current:
            self._data.extend(bytes(new_size - current))
        self.reserve(new_size)

    def writable(self, size: int = 0) -> bytearray:
        """Return the underlying buffer for in-place writing.

        A positive ``size`` first resizes the buffer to exactly that many
        bytes; with ``size`` of 0 the current size is kept.
        """
        if size > 0:
            self.resize(size)
        return self._data

    # -- assignment and appending ---------------------------------------

    def assign(self, data: BytesLike) -> None:
        """Replace the content with ``data``."""
        raw = _raw(data)
        self.clear()
        self._data.extend(raw)
        self.reserve(len(raw))

    def assign_hex(self, hex_text: BytesLike) -> None:
        """Replace the content with the bytes encoded by ``hex_text``."""
        self.assign(self._decode_hex(hex_text))

    def append(self, data: Union[BytesLike, int]) -> None:
        """Append bytes, a string, or a single byte value."""
        if isinstance(data, int):
            if not 0 <= data <= 0xFF:
                raise ValueError("byte value must be in range 0..255")
            self._data.append(data)
        else:
            self._data.extend(_raw(data))
        self.reserve(len(self._data))

    def append_hex(self, hex_text: BytesLike) -> None:
        """Append the bytes encoded by ``hex_text``."""
        self.append(self._decode_hex(hex_text))

    @staticmethod
    def _decode_hex(hex_text: BytesLike) -> bytes:
        text = _raw(hex_text).decode("ascii")
        return bytes.fromhex(text)

    # -- comparison -----------------------------------------------------

    def compare(self, other: BytesLike) -> int:
        """Return -1, 0 or 1 as this buffer sorts before, equal to or after ``other``."""
        mine = bytes(self._data)
        theirs = _raw(other)
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0

    def _cmp_or_none(self, other: object) -> int | None:
        if isinstance(other, (Bytes, bytes, bytearray, memoryview, str)):
            return self.compare(other)
        return None

    def __eq__(self, other: object) -> bool:
        result = self._cmp_or_none(other)
        return NotImplemented if result is None else result == 0

    def __lt__(self, other: object) -> bool:
        result = self._cmp_or_none(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: object) -> bool:
        result = self._cmp_or_none(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: object) -> bool:
        result = self._cmp_or_none(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: object) -> bool:
        result = self._cmp_or_none(other)
        return NotImplemented if result is None else result >= 0

    def __hash__(self) -> int:
        return hash(bytes(self._data))

    # -- operators ------------------------------------------------------

    def __bool__(self) -> bool:
        return bool(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(bytes(self._data))

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __getitem__(self, index: Union[int, slice]) -> Union[int, "Bytes"]:
        if isinstance(index, slice):
            return Bytes(self._data[index])
        return self._data[index]

    def __add__(self, other: BytesLike) -> "Bytes":
        result = Bytes(self)
        result.append(other)
        return result

    def __iadd__(self, other: BytesLike) -> "Bytes":
        self.append(other)
        return self

    def __lshift__(self, other: Union[BytesLike, int]) -> "Bytes":
        """Append ``other`` in place and return this buffer, for chaining."""
        self.append(other)
        return self

    def __repr__(self) -> str:
        return f"Bytes({self.to_hex()!r})"

    # -- conversion -----------------------------------------------------

    def to_string(self) -> str:
        """Decode the content as UTF-8 text, replacing invalid sequences."""
        return self._data.decode("utf-8", errors="replace")

    def to_hex(self, upper: bool = False) -> str:
        """Encode the content as a hex string."""
        text = self._data.hex()
        return text.upper() if upper else text

    # -- slicing --------------------------------------------------------

    def mid(self, begin: int, length: int | None = None) -> "Bytes":
        """Return ``length`` bytes from ``begin`` (to the end if omitted).

        A start beyond the end gives an empty buffer; a length running past
        the end is cut short.
        """
        if begin < 0:
            raise ValueError("begin must not be negative")
        if begin >= len(self._data):
            return Bytes()
        if length is None:
            return Bytes(self._data[begin:])
        if length < 0:
            raise ValueError("length must not be negative")
        return Bytes(self._data[begin:begin + length])

    def left(self, length: int) -> "Bytes":
        """Return the first ``length`` bytes, or all if fewer."""
        if length < 0:
            raise ValueError("length must not be negative")
        return Bytes(self._data[:length])

    def right(self, length: int) -> "Bytes":
        """Return the last ``length`` bytes, or all if fewer."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length == 0:
            return Bytes()
        return Bytes(self._data[-length:])

    def find(self, needle: BytesLike, pos: int = 0) -> int:
        """Return the index of the first ``needle`` at or after ``pos``, or -1."""
        if pos < 0 or pos >= len(self._data):
            return -1
        return self._data.find(_raw(needle), pos)


def bytes_from_string(text: str) -> Bytes:
    """Build a buffer from the UTF-8 encoding of ``text``."""
    return Bytes(text)


def string_from_bytes(data: Bytes) -> str:
    """Decode a buffer as text."""
    return data.to_string()


def hex_from_bytes(data: Bytes) -> str:
    """Encode a buffer as lower-case hex."""
    return data.to_hex()


def hex_from_byte(value: int, upper: bool = True) -> str:
    """Encode a single byte value as two hex digits."""
    if not 0 <= value <= 0xFF:
        raise ValueError("byte value must be in range 0..255")
    return f"{value:02X}" if upper else f"{value:02x}"