"""Reading and writing Rockchip CFG partition configuration files."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

_HEADER = struct.Struct("<4s18sBIH")
_ITEM = struct.Struct("<H80s520sIB3s")

HEADER_SIZE = _HEADER.size
ITEM_SIZE = _ITEM.size
NAME_UNITS = 40
PATH_UNITS = 260
MAGIC = b"CFG"


class RKCfgError(Exception):
    """Raised when a CFG file cannot be read, parsed or written."""


def read_fixed(data: bytes, length: int) -> str:
    """Decode a fixed-size UTF-16LE buffer of *length* units up to the first zero unit."""
    units = bytes(data[: length * 2])
    end = len(units) - len(units) % 2
    for pos in range(0, end, 2):
        if units[pos : pos + 2] == b"\0\0":
            end = pos
            break
    return units[:end].decode("utf-16-le", errors="surrogatepass")


def write_fixed(text: str, length: int) -> bytes:
    """Encode *text* into a zero-padded UTF-16LE buffer of *length* units.

    At most ``length - 1`` units are kept so the buffer stays terminated.
    """
    encoded = text.encode("utf-16-le", errors="surrogatepass")
    kept = encoded[: max(length - 1, 0) * 2]
    return kept.ljust(length * 2, b"\0")


@dataclass
class Header:
    """The fixed header at the start of a CFG file."""

    magic: bytes = MAGIC + b"\0"
    gap: bytes = bytes(18)
    length: int = 0
    begin: int = HEADER_SIZE
    item_size: int = ITEM_SIZE

    @classmethod
    def create(cls) -> "Header":
        """Return a minimal header for a new configuration."""
        return cls()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Header":
        if len(data) < HEADER_SIZE:
            raise RKCfgError("Truncated header")
        magic, gap, length, begin, item_size = _HEADER.unpack_from(data)
        if magic[:3] != MAGIC:
            raise RKCfgError("Bad magic number")
        if item_size != ITEM_SIZE:
            raise RKCfgError("Unsupported item size")
        return cls(magic, gap, length, begin, item_size)

    def to_bytes(self, length: int) -> bytes:
        """Serialise the header with its entry count set to *length* (stored in one byte)."""
        return _HEADER.pack(
            self.magic, self.gap, length & 0xFF, self.begin, self.item_size
        )


@dataclass
class Entry:
    """One partition entry; *raw* keeps the on-disk record so unknown bytes survive."""

    name: str = ""
    path: str = ""
    address: int = 0
    selected: int = 0
    raw: bytes = field(default=bytes(ITEM_SIZE), repr=False)

    @classmethod
    def new(cls, name: str, path: str) -> "Entry":
        entry = cls()
        entry.set_name(name)
        entry.set_path(path)
        return entry

    @classmethod
    def from_bytes(cls, data: bytes) -> "Entry":
        if len(data) < ITEM_SIZE:
            raise RKCfgError("Truncated item")
        raw = bytes(data[:ITEM_SIZE])
        _, name, path, address, selected, _ = _ITEM.unpack(raw)
        return cls(
            name=read_fixed(name, NAME_UNITS),
            path=read_fixed(path, PATH_UNITS),
            address=address,
            selected=selected,
            raw=raw,
        )

    @property
    def size(self) -> int:
        """The record size stored in the raw item."""
        return _ITEM.unpack(self.raw)[0]

    def _replace_raw(self, **fields: object) -> None:
        size, name, path, address, selected, gap = _ITEM.unpack(self.raw)
        values = dict(
            size=size, name=name, path=path, address=address, selected=selected, gap=gap
        )
        values.update(fields)
        self.raw = _ITEM.pack(*values.values())

    def set_name(self, name: str) -> None:
        self.name = name
        self._replace_raw(name=write_fixed(name, NAME_UNITS))

    def set_path(self, path: str) -> None:
        self.path = path
        self._replace_raw(path=write_fixed(path, PATH_UNITS))

    def to_bytes(self, item_size: int) -> bytes:
        _, name, path, _, _, gap = _ITEM.unpack(self.raw)
        return _ITEM.pack(
            item_size & 0xFFFF,
            name,
            path,
            self.address & 0xFFFFFFFF,
            self.selected & 0xFF,
            gap,
        )


@dataclass
class Config:
    """A whole CFG file: its header and its entries in order."""

    header: Header = field(default_factory=Header.create)
    entries: list[Entry] = field(default_factory=list)

    @classmethod
    def create(cls) -> "Config":
        return cls()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Config":
        header = Header.from_bytes(data)
        entries = []
        for index in range(header.length):
            offset = HEADER_SIZE + index * ITEM_SIZE
            entry = Entry.from_bytes(data[offset : offset + ITEM_SIZE])
            if entry.size != header.item_size:
                raise RKCfgError("Item size mismatch")
            entries.append(entry)
        return cls(header, entries)

    def to_bytes(self) -> bytes:
        parts = [self.header.to_bytes(len(self.entries))]
        parts.extend(entry.to_bytes(self.header.item_size) for entry in self.entries)
        return b"".join(parts)


def read_rkcfg(path: PathLike) -> Config:
    """Load a CFG file from disk."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise RKCfgError(f"Cannot open {path}") from exc
    return Config.from_bytes(data)


def write_rkcfg(path: PathLike, config: Config) -> int:
    """Save *config* to *path* and return the number of bytes written."""
    data = config.to_bytes()
    try:
        Path(path).write_bytes(data)
    except OSError as exc:
        raise RKCfgError(f"Cannot write {path}") from exc
    return len(data)