from collections import deque

from hypermaze.core.graph import HypercubeGraph


class MazeAnalyzer:
    @staticmethod
    def count_passages(graph: HypercubeGraph) -> int:
        return sum(1 for _ in graph.passage_pairs())

    @staticmethod
    def calculate_stats(graph: HypercubeGraph):
        # Cells are classified by how many passages leave them.
        isolated = 0
        dead_ends = 0
        corridors = 0
        junctions = 0

        for cell in graph.data:
            exits = sum(cell.passages.values())
            if exits == 0: isolated += 1
            elif exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            else: junctions += 1

        total = graph.size
        return {
            "passages": MazeAnalyzer.count_passages(graph),
            "isolated": isolated,
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }

    @staticmethod
    def is_perfect(graph: HypercubeGraph) -> bool:
        """
        True when the open passages form a spanning tree:
        n - 1 passages and every cell reachable from cell 0.
        """
        if graph.size == 0:
            return True
        if MazeAnalyzer.count_passages(graph) != graph.size - 1:
            return False

        seen = {0}
        queue = deque([0])
        while queue:
            for neighbor in graph.open_neighbors(queue.popleft()):
                if neighbor not in seen:
                    seen.add(neighbor)
                    queue.append(neighbor)
        return len(seen) == graph.size
