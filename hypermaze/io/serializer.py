import struct
import json
import zlib
from typing import Any, Dict, Tuple

from hypermaze.core.cell import Status
from hypermaze.core.graph import HypercubeGraph, build_graph


class MazeSerializer:
    MAGIC = b"HMAZ"
    VERSION = 2

    # Flags
    FLAG_COMPRESSED = 1

    @staticmethod
    def snapshot(graph: HypercubeGraph) -> Dict[str, Any]:
        """Read-only view of the graph with plain Python values."""
        return {
            "layout": graph.layout,
            "dimensions": list(graph.dimensions),
            "magnitudes": list(graph.magnitudes),
            "degree": graph.degree,
            "size": graph.size,
            "compass": dict(graph.compass),
            "directions": list(graph.directions),
            "antipodes": dict(graph.antipodes),
            "data": [cell.to_dict() for cell in graph.data],
        }

    @staticmethod
    def from_snapshot(snapshot: Dict[str, Any]) -> HypercubeGraph:
        graph = build_graph(snapshot["dimensions"], snapshot.get("layout", HypercubeGraph.LAYOUT))
        cells = snapshot["data"]
        if len(cells) != graph.size:
            raise ValueError(f"Snapshot holds {len(cells)} cells, expected {graph.size}")
        for entry in cells:
            cell = graph.cell(entry["id"])
            cell.status = Status(entry["status"])
            for direction, is_open in entry["passages"].items():
                MazeSerializer._restore_passage(graph, cell.id, direction, bool(is_open))
        return graph

    @staticmethod
    def to_json(graph: HypercubeGraph, **kwargs) -> str:
        return json.dumps(MazeSerializer.snapshot(graph), **kwargs)

    @staticmethod
    def from_json(text: str) -> HypercubeGraph:
        return MazeSerializer.from_snapshot(json.loads(text))

    @staticmethod
    def _restore_passage(graph: HypercubeGraph, id: int, direction: str, is_open: bool):
        cell = graph.data[id]
        if direction not in cell.passages:
            raise ValueError(f"Unknown direction {direction!r} on cell {id}")
        if is_open and cell.neighbors[direction] is None:
            raise ValueError(f"Cell {id} has a passage {direction} through the boundary")
        cell.passages[direction] = is_open

    @staticmethod
    def mask_width(graph: HypercubeGraph) -> int:
        return (len(graph.directions) + 7) // 8

    @staticmethod
    def save(graph: HypercubeGraph, filepath: str, meta: Dict[str, Any] = None, compress=False):
        """
        Saves the maze to a binary file.
        Format:
        - MAGIC (4 bytes)
        - VERSION (1 byte)
        - FLAGS (1 byte)
        - DEGREE (1 byte)
        - DIMENSIONS (4 bytes each)
        - META_LEN (2 bytes)
        - META_JSON (META_LEN bytes)
        - DATA_LEN (4 bytes)
        - DATA: one status byte per cell, then one passage mask per cell
          (ceil(directions / 8) bytes, bit i = directions[i])
        """
        if meta is None:
            meta = {}

        flags = 0
        if compress:
            flags |= MazeSerializer.FLAG_COMPRESSED

        meta_bytes = json.dumps(meta).encode('utf-8')

        statuses = bytes(cell.status.code for cell in graph.data)
        width = MazeSerializer.mask_width(graph)
        masks = bytearray()
        for cell in graph.data:
            mask = 0
            for bit, direction in enumerate(graph.directions):
                if cell.passages[direction]:
                    mask |= 1 << bit
            masks += mask.to_bytes(width, "big")
        data = statuses + bytes(masks)
        if compress:
            data = zlib.compress(data)

        with open(filepath, "wb") as f:
            f.write(MazeSerializer.MAGIC)
            f.write(struct.pack(">BBB", MazeSerializer.VERSION, flags, graph.degree))
            f.write(struct.pack(f">{graph.degree}I", *graph.dimensions))
            f.write(struct.pack(">H", len(meta_bytes)))
            f.write(meta_bytes)
            f.write(struct.pack(">I", len(data)))
            f.write(data)

    @staticmethod
    def load(filepath: str) -> Tuple[HypercubeGraph, Dict[str, Any]]:
        with open(filepath, "rb") as f:
            magic = f.read(4)
            if magic != MazeSerializer.MAGIC:
                raise ValueError("Invalid file format")

            version, flags, degree = struct.unpack(">BBB", f.read(3))
            if version != MazeSerializer.VERSION:
                raise ValueError(f"Unsupported version {version}")
            dimensions = struct.unpack(f">{degree}I", f.read(4 * degree))
            meta_len = struct.unpack(">H", f.read(2))[0]
            meta = json.loads(f.read(meta_len).decode('utf-8'))

            data_len = struct.unpack(">I", f.read(4))[0]
            data = f.read(data_len)
            if flags & MazeSerializer.FLAG_COMPRESSED:
                data = zlib.decompress(data)

        graph = build_graph(dimensions)
        width = MazeSerializer.mask_width(graph)
        expected = graph.size * (1 + width)
        if len(data) != expected:
            raise ValueError(f"Expected {expected} data bytes, got {len(data)}")
        masks = [
            int.from_bytes(data[offset:offset + width], "big")
            for offset in range(graph.size, expected, width)
        ] if width else [0] * graph.size
        for cell, code, mask in zip(graph.data, data[:graph.size], masks):
            cell.status = Status.from_code(code)
            for bit, direction in enumerate(graph.directions):
                if mask & (1 << bit):
                    MazeSerializer._restore_passage(graph, cell.id, direction, True)

        return graph, meta
