import struct
from typing import Iterator, Sequence, Tuple

MAGIC = b"HMZLOG"

# Event Types
EVT_STATUS = 0x01
EVT_CARVE = 0x02

# Payload layouts (after the type byte)
_STATUS = struct.Struct(">IB")   # id, status code
_CARVE = struct.Struct(">IBI")   # id, direction index, neighbor id


class EventWriter:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")

    def write_header(self, dimensions: Sequence[int]):
        # Header: Magic "HMZLOG" + Degree (1b) + one uint32 per axis
        self.file.write(MAGIC)
        self.file.write(struct.pack(">B", len(dimensions)))
        self.file.write(struct.pack(f">{len(dimensions)}I", *dimensions))

    def log_status(self, id: int, status_code: int):
        # 1 byte type + 4 byte id + 1 byte status = 6 bytes
        self.file.write(struct.pack(">B", EVT_STATUS) + _STATUS.pack(id, status_code))

    def log_carve(self, id: int, direction_index: int, neighbor: int):
        self.file.write(struct.pack(">B", EVT_CARVE) + _CARVE.pack(id, direction_index, neighbor))

    def close(self):
        if self.file:
            self.file.close()
            self.file = None


class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.dimensions: Tuple[int, ...] = ()

    def _read(self, size: int) -> bytes:
        data = self.file.read(size)
        if len(data) != size:
            raise ValueError("Truncated event log")
        return data

    def read_header(self) -> Tuple[int, ...]:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid event log file")
        degree = self._read(1)[0]
        self.dimensions = struct.unpack(f">{degree}I", self._read(4 * degree))
        return self.dimensions

    def stream_events(self) -> Iterator[Tuple[int, Tuple]]:
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break

            type_code = type_byte[0]
            if type_code == EVT_STATUS:
                yield (type_code, _STATUS.unpack(self._read(_STATUS.size)))
            elif type_code == EVT_CARVE:
                yield (type_code, _CARVE.unpack(self._read(_CARVE.size)))
            else:
                raise ValueError(f"Unknown event type 0x{type_code:02x}")

    def close(self):
        if self.file:
            self.file.close()
            self.file = None
