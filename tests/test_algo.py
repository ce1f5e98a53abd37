import itertools
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hypermaze.core.cell import Status
from hypermaze.core.complexity import MazeAnalyzer
from hypermaze.core.errors import InvalidIndex
from hypermaze.core.graph import HypercubeGraph
from hypermaze.algo.base import Step, VISIT, CARVE, DONE
from hypermaze.algo.bfs import IterativeBreadthFirst
from hypermaze.algo.dfs import IterativeDepthFirst
from hypermaze.algo.factory import build_maze, build_traversal
from hypermaze.algo.shuffle import shuffle


def first_choice():
    return 0.0


def statuses(graph):
    return [cell.status for cell in graph.data]


U, A, P, C = Status.UNVISITED, Status.ACTIVE, Status.PASSIVE, Status.COMPLETE


class TestShuffle(unittest.TestCase):
    def test_zero_source_keeps_order(self):
        self.assertEqual(shuffle("abcd", random=first_choice), list("abcd"))

    def test_permutation(self):
        items = list(range(10))
        result = shuffle(items, random=itertools.cycle([0.5, 0.99, 0.1]).__next__)
        self.assertEqual(sorted(result), items)
        self.assertEqual(items, list(range(10)))

    def test_count(self):
        self.assertEqual(len(shuffle(range(10), 3)), 3)
        self.assertEqual(shuffle(["a", "b", "c"], 2, random=lambda: 0.99), ["c", "b"])


class TestDepthFirst(unittest.TestCase):
    def test_two_by_two_first_choice(self):
        graph = HypercubeGraph([2, 2])
        dfs = IterativeDepthFirst(graph, random=first_choice)
        steps = dfs.run_all()

        self.assertEqual(dfs.carved, [(0, "east", 1), (1, "south", 3), (3, "west", 2)])
        self.assertEqual(MazeAnalyzer.count_passages(graph), 3)
        self.assertEqual(statuses(graph), [C, C, C, C])
        self.assertTrue(MazeAnalyzer.is_perfect(graph))
        # visits 0, 1, 3, 2, 3, 1, 0 then the terminal step
        self.assertEqual(steps, 8)
        self.assertTrue(dfs.is_done)
        self.assertFalse(dfs.stack.has_nodes)

    def test_suspension_points(self):
        graph = HypercubeGraph([2, 2])
        dfs = IterativeDepthFirst(graph, random=first_choice)
        self.assertIsNone(dfs.last_step)
        self.assertEqual(statuses(graph), [U, U, U, U])

        dfs.advance()
        self.assertEqual(dfs.last_step, Step(VISIT, 0))
        self.assertEqual(statuses(graph), [A, U, U, U])
        self.assertEqual(dfs.carved, [])

        dfs.advance()
        self.assertEqual(dfs.last_step, Step(VISIT, 1))
        self.assertEqual(statuses(graph), [P, A, U, U])
        self.assertTrue(graph.data[0].passages["east"])

        dfs.advance()
        dfs.advance()
        self.assertEqual(statuses(graph), [P, P, A, P])
        # 2 is a dead end: completes on the next resume, 3 takes over
        dfs.advance()
        self.assertEqual(dfs.last_step, Step(VISIT, 3))
        self.assertEqual(statuses(graph), [P, P, C, A])
        self.assertFalse(dfs.is_done)

    def test_degree_zero(self):
        graph = HypercubeGraph([])
        dfs = IterativeDepthFirst(graph)
        self.assertEqual(dfs.run_all(), 2)
        self.assertIs(graph.data[0].status, Status.COMPLETE)
        self.assertTrue(MazeAnalyzer.is_perfect(graph))

    def test_advance_after_done_is_noop(self):
        dfs = IterativeDepthFirst(HypercubeGraph([3]), seed=1)
        dfs.run_all()
        count = dfs.step_count
        dfs.advance()
        self.assertEqual(dfs.step_count, count)
        self.assertEqual(dfs.last_step, Step(DONE, None))
        self.assertEqual(list(dfs.run()), [])

    def test_run_and_advance_share_one_sequence(self):
        dfs = IterativeDepthFirst(HypercubeGraph([4, 4]), seed=3)
        dfs.advance()
        dfs.advance()
        rest = list(dfs.run())
        self.assertEqual(len(rest) + 2, dfs.step_count)
        self.assertEqual(rest[-1], Step(DONE, None))

    def test_single_active_cell(self):
        graph = HypercubeGraph([4, 3, 2])
        dfs = IterativeDepthFirst(graph, seed=11)
        while not dfs.is_done:
            dfs.advance()
            active = statuses(graph).count(Status.ACTIVE)
            self.assertEqual(active, 0 if dfs.is_done else 1)

    def test_invalid_start(self):
        with self.assertRaises(InvalidIndex):
            IterativeDepthFirst(HypercubeGraph([2, 2]), start=4)
        with self.assertRaises(InvalidIndex):
            IterativeDepthFirst(HypercubeGraph([0, 3]))


class TestBreadthFirst(unittest.TestCase):
    def test_two_by_two_trace(self):
        graph = HypercubeGraph([2, 2])
        bfs = IterativeBreadthFirst(graph, random=first_choice)

        expected = [
            (Step(VISIT, 0), [A, U, U, U]),
            (Step(CARVE, 1), [P, A, U, U]),
            (Step(VISIT, 0), [A, P, U, U]),
            (Step(CARVE, 2), [P, P, A, U]),
            (Step(VISIT, 0), [A, P, P, U]),
            (Step(VISIT, 1), [C, A, P, U]),
            (Step(CARVE, 3), [C, P, P, A]),
            (Step(VISIT, 1), [C, A, P, P]),
            (Step(VISIT, 2), [C, C, A, P]),
            (Step(VISIT, 3), [C, C, C, A]),
            (Step(DONE, None), [C, C, C, C]),
        ]
        for step, state in expected:
            self.assertFalse(bfs.is_done)
            bfs.advance()
            self.assertEqual(bfs.last_step, step)
            self.assertEqual(statuses(graph), state)

        self.assertTrue(bfs.is_done)
        self.assertEqual(bfs.carved, [(0, "east", 1), (0, "south", 2), (1, "south", 3)])

    def test_start_elsewhere(self):
        graph = HypercubeGraph([5, 5])
        bfs = IterativeBreadthFirst(graph, start=12, seed=7)
        bfs.advance()
        self.assertEqual(bfs.last_step, Step(VISIT, 12))
        bfs.run_all()
        self.assertTrue(MazeAnalyzer.is_perfect(graph))


class TestSpanningTree(unittest.TestCase):
    SHAPES = ([7], [5, 4], [3, 3, 3], [2, 3, 2, 2], [2, 2, 2, 2, 2], [1, 6], [4, 1, 3])

    def check(self, cls):
        for dims in self.SHAPES:
            graph = HypercubeGraph(dims)
            for start in (0, graph.size - 1, graph.size // 2):
                graph = HypercubeGraph(dims)
                cls(graph, start=start, seed=start + 1).run_all()
                self.assertEqual(MazeAnalyzer.count_passages(graph), graph.size - 1, dims)
                self.assertTrue(all(s is Status.COMPLETE for s in statuses(graph)), dims)
                self.assertTrue(MazeAnalyzer.is_perfect(graph), dims)

    def test_dfs(self):
        self.check(IterativeDepthFirst)

    def test_bfs(self):
        self.check(IterativeBreadthFirst)

    def test_neighbor_links_untouched(self):
        for cls in (IterativeDepthFirst, IterativeBreadthFirst):
            graph = HypercubeGraph([4, 3, 2])
            before = [dict(cell.neighbors) for cell in graph.data]
            cls(graph, seed=5).run_all()
            self.assertEqual([cell.neighbors for cell in graph.data], before)


class TestDeterminism(unittest.TestCase):
    def test_seeded(self):
        for cls in (IterativeDepthFirst, IterativeBreadthFirst):
            a = cls(HypercubeGraph([6, 5]), seed=12345)
            b = cls(HypercubeGraph([6, 5]), seed=12345)
            a.run_all()
            for _ in b.run(): pass
            self.assertEqual(a.carved, b.carved)

    def test_scripted_source(self):
        values = [0.3, 0.7, 0.1, 0.95, 0.5]
        runs = []
        for _ in range(2):
            dfs = IterativeDepthFirst(HypercubeGraph([4, 4]), random=itertools.cycle(values).__next__)
            dfs.run_all()
            runs.append(dfs.carved)
        self.assertEqual(runs[0], runs[1])

    def test_different_seeds_differ(self):
        a = IterativeDepthFirst(HypercubeGraph([10, 10]), seed=1)
        b = IterativeDepthFirst(HypercubeGraph([10, 10]), seed=2)
        a.run_all()
        b.run_all()
        self.assertNotEqual(a.carved, b.carved)


class TestFactory(unittest.TestCase):
    def test_names(self):
        self.assertIsInstance(build_maze([3, 3], algorithm="dfs"), IterativeDepthFirst)
        self.assertIsInstance(build_maze([3, 3], algorithm="bfs"), IterativeBreadthFirst)
        self.assertIsInstance(
            build_maze([3, 3], algorithm="iterative breadth-first traversal"), IterativeBreadthFirst
        )

    def test_unknown_algorithm_falls_back(self):
        with self.assertLogs("hypermaze", level="WARNING"):
            engine = build_traversal(HypercubeGraph([2, 2]), "wilson")
        self.assertIsInstance(engine, IterativeDepthFirst)

    def test_build_maze_passes_options(self):
        engine = build_maze([3, 3, 3], algorithm="bfs", start=13, random=first_choice)
        self.assertEqual(engine.graph.dimensions, (3, 3, 3))
        self.assertEqual(engine.start, 13)
        self.assertEqual(engine.queue.front(), 13)


if __name__ == '__main__':
    unittest.main()
