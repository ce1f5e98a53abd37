import json
import unittest
import sys
import os
import shutil
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hypermaze.core.cell import Status
from hypermaze.core.graph import HypercubeGraph
from hypermaze.algo.dfs import IterativeDepthFirst
from hypermaze.io.serializer import MazeSerializer


def cell_state(graph):
    return [(cell.status, dict(cell.passages)) for cell in graph.data]


class TestSnapshot(unittest.TestCase):
    def test_shape(self):
        graph = HypercubeGraph([2, 3])
        graph.connect_passage("south", 0, 2)
        graph.mark(0, Status.ACTIVE)

        snap = MazeSerializer.snapshot(graph)
        self.assertEqual(snap["layout"], "hypercube")
        self.assertEqual(snap["dimensions"], [2, 3])
        self.assertEqual(snap["magnitudes"], [1, 2])
        self.assertEqual(snap["degree"], 2)
        self.assertEqual(snap["size"], 6)
        self.assertEqual(snap["compass"], {"west": -1, "east": 1, "north": -2, "south": 2})
        self.assertEqual(snap["antipodes"]["south"], "north")
        self.assertEqual(len(snap["data"]), 6)
        self.assertEqual(snap["data"][0], {
            "id": 0,
            "status": "active",
            "neighbors": {"west": None, "east": 1, "north": None, "south": 2},
            "passages": {"west": False, "east": False, "north": False, "south": True},
        })

    def test_json_round_trip(self):
        graph = HypercubeGraph([3, 2, 2])
        dfs = IterativeDepthFirst(graph, seed=4)
        for _ in range(10):
            dfs.advance()

        text = MazeSerializer.to_json(graph)
        self.assertEqual(json.loads(text)["size"], 12)
        restored = MazeSerializer.from_json(text)
        self.assertEqual(cell_state(restored), cell_state(graph))

    def test_rejects_passage_through_boundary(self):
        snap = MazeSerializer.snapshot(HypercubeGraph([2, 2]))
        snap["data"][0]["passages"]["west"] = True
        with self.assertRaises(ValueError):
            MazeSerializer.from_snapshot(snap)

    def test_rejects_wrong_cell_count(self):
        snap = MazeSerializer.snapshot(HypercubeGraph([2, 2]))
        snap["data"].pop()
        with self.assertRaises(ValueError):
            MazeSerializer.from_snapshot(snap)


class TestBinary(unittest.TestCase):
    def setUp(self):
        self.out = tempfile.mkdtemp(prefix="hypermaze_test_")

    def tearDown(self):
        shutil.rmtree(self.out, ignore_errors=True)

    def make_maze(self, dims, seed=42):
        graph = HypercubeGraph(dims)
        IterativeDepthFirst(graph, seed=seed).run_all()
        return graph

    def test_round_trip_raw(self):
        graph = self.make_maze([6, 5])
        path = os.path.join(self.out, "raw.hmaz")
        MazeSerializer.save(graph, path, meta={"algo": "dfs", "seed": 42})

        graph2, meta = MazeSerializer.load(path)
        self.assertEqual(graph2.dimensions, graph.dimensions)
        self.assertEqual(cell_state(graph2), cell_state(graph))
        self.assertEqual(meta, {"algo": "dfs", "seed": 42})

    def test_round_trip_compressed_high_degree(self):
        graph = self.make_maze([3, 2, 2, 2, 2])
        path = os.path.join(self.out, "comp.hmaz")
        MazeSerializer.save(graph, path, compress=True)

        graph2, meta = MazeSerializer.load(path)
        self.assertEqual(cell_state(graph2), cell_state(graph))
        self.assertEqual(meta, {})

    def test_round_trip_over_sixteen_axes(self):
        # 17 axes -> 34 directions, masks wider than 32 bits
        graph = self.make_maze([1] * 16 + [2])
        self.assertTrue(graph.data[0].passages["pos-16"])
        self.assertEqual(MazeSerializer.mask_width(graph), 5)

        for compress in (False, True):
            path = os.path.join(self.out, f"wide_{compress}.hmaz")
            MazeSerializer.save(graph, path, compress=compress)
            graph2, _ = MazeSerializer.load(path)
            self.assertEqual(graph2.dimensions, graph.dimensions)
            self.assertEqual(cell_state(graph2), cell_state(graph))
            self.assertTrue(graph2.data[1].passages["neg-16"])

    def test_partial_state(self):
        graph = HypercubeGraph([4, 4])
        dfs = IterativeDepthFirst(graph, seed=9)
        for _ in range(5):
            dfs.advance()
        path = os.path.join(self.out, "partial.hmaz")
        MazeSerializer.save(graph, path)

        graph2, _ = MazeSerializer.load(path)
        self.assertIn(Status.ACTIVE, [cell.status for cell in graph2.data])
        self.assertEqual(cell_state(graph2), cell_state(graph))

    def test_bad_magic(self):
        path = os.path.join(self.out, "bad.hmaz")
        with open(path, "wb") as f:
            f.write(b"NOPE" + bytes(16))
        with self.assertRaises(ValueError):
            MazeSerializer.load(path)


if __name__ == '__main__':
    unittest.main()
