import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'hypermaze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def axis_pin(text):
    """'2=1' -> (2, 1)"""
    axis, _, coordinate = text.partition("=")
    try:
        return int(axis), int(coordinate)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected AXIS=COORD, got {text!r}")


def build_parser():
    parser = argparse.ArgumentParser(description="Hypermaze: stepwise N-dimensional maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--dims", type=int, nargs="*", default=[10, 10], help="Length of each axis")
    gen_parser.add_argument("--algo", type=str, default="dfs", choices=["dfs", "bfs"], help="Traversal algorithm")
    gen_parser.add_argument("--start", type=int, default=0, help="Start cell id")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--visual", action="store_true", help="Animate generation in a window")
    gen_parser.add_argument("--record", nargs="?", const="", default=None, metavar="PATH",
                            help="Record generation video (named from dims and algorithm unless PATH is given)")
    gen_parser.add_argument("--steps-per-frame", type=int, default=1, help="Engine steps per rendered frame")
    gen_parser.add_argument("--fixed", nargs="*", metavar="AXIS=COORD", type=axis_pin, help="Pin hidden axes when drawing")
    gen_parser.add_argument("--out", type=str, help="Binary output file path (optional)")
    gen_parser.add_argument("--compress", action="store_true", help="zlib-compress the binary output")
    gen_parser.add_argument("--json", type=str, help="JSON snapshot output path (optional)")
    gen_parser.add_argument("--record-events", type=str, help="Save generation events to binary file")

    # Inspect Command
    inspect_parser = subparsers.add_parser("inspect", help="Print statistics of a saved maze")
    inspect_parser.add_argument("input_file", help="Path to a binary maze file")
    inspect_parser.add_argument("--slice", type=str, nargs="*",
                                help="Coordinates to list ids for, '_' as wildcard (e.g. 2 _ 0)")

    # Replay Command
    replay_parser = subparsers.add_parser("replay", help="Replay an event log")
    replay_parser.add_argument("event_file", help="Path to event log file")
    replay_parser.add_argument("--visual", action="store_true", help="Animate the replay in a window")
    replay_parser.add_argument("--record", nargs="?", const="", default=None, metavar="PATH",
                               help="Record replay video (named from dims unless PATH is given)")
    replay_parser.add_argument("--steps-per-frame", type=int, default=1, help="Events per rendered frame")
    replay_parser.add_argument("--fixed", nargs="*", metavar="AXIS=COORD", type=axis_pin, help="Pin hidden axes when drawing")

    return parser


def open_renderer(engine, args, label):
    from hypermaze.viz.plane import PlaneView
    from hypermaze.viz.renderer import Renderer
    recorder = None
    if args.record is not None:
        from hypermaze.viz.recorder import VideoRecorder
        recorder = VideoRecorder.for_engine(engine, label, output_file=args.record or None)
        logging.getLogger("hypermaze").info(f"Recording video to {recorder.output_file}")
    view = PlaneView(engine.graph, fixed=dict(args.fixed or []))
    return Renderer(view, engine=engine, steps_per_frame=args.steps_per_frame, recorder=recorder)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("hypermaze")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        logger.info(f"Generating {args.dims} maze with {args.algo.upper()}...")

        from hypermaze.core.events import EventWriter
        evt_writer = None
        if args.record_events:
            evt_writer = EventWriter(args.record_events)
            logger.info(f"Recording events to {args.record_events}...")
        try:
            generate(args, logger, evt_writer)
        finally:
            if evt_writer:
                evt_writer.close()

    elif args.command == "inspect":
        from hypermaze.io.serializer import MazeSerializer
        from hypermaze.core.complexity import MazeAnalyzer
        graph, meta = MazeSerializer.load(args.input_file)
        logger.info(f"Loaded {list(graph.dimensions)} maze. Meta: {meta}")

        stats = MazeAnalyzer.calculate_stats(graph)
        print(f"Dimensions: {list(graph.dimensions)} ({graph.size} cells)")
        for key, value in stats.items():
            print(f"{key:<18} {value}")
        print(f"{'perfect':<18} {MazeAnalyzer.is_perfect(graph)}")

        if args.slice is not None:
            coordinates = [None if c == "_" else int(c) for c in args.slice]
            print(f"Slice {args.slice}: {graph.slice_on(*coordinates)}")

    elif args.command == "replay":
        logger.info(f"Replaying {args.event_file}...")
        from hypermaze.core.events import EventReader

        reader = EventReader(args.event_file)
        try:
            replay(args, logger, reader)
        finally:
            reader.close()


def generate(args, logger, evt_writer):
    from hypermaze.algo.factory import build_maze
    engine = build_maze(args.dims, algorithm=args.algo, start=args.start, seed=args.seed,
                        event_writer=evt_writer)
    graph = engine.graph

    if args.visual or args.record is not None:
        logger.info("Visual mode enabled - Opening window...")
        renderer = open_renderer(engine, args, args.algo)
        renderer.init_window()
        renderer.run_loop()
    else:
        logger.info("Headless generation...")
        steps = engine.run_all()
        logger.info(f"Done in {steps} steps.")

    from hypermaze.core.complexity import MazeAnalyzer
    logger.info(f"Stats: {MazeAnalyzer.calculate_stats(graph)}")

    if args.out:
        logger.info(f"Saving maze to {args.out}...")
        from hypermaze.io.serializer import MazeSerializer
        meta = {"algo": args.algo, "seed": args.seed, "start": args.start, "complete": engine.is_done}
        MazeSerializer.save(graph, args.out, meta=meta, compress=args.compress)
        logger.info("Save complete.")

    if args.json:
        from hypermaze.io.serializer import MazeSerializer
        with open(args.json, "w") as f:
            f.write(MazeSerializer.to_json(graph))
        logger.info(f"Wrote JSON snapshot to {args.json}")


def replay(args, logger, reader):
    from hypermaze.core.graph import build_graph
    from hypermaze.viz.replay import EventAdapter

    dimensions = reader.read_header()
    logger.info(f"Log Header: {list(dimensions)}")

    adapter = EventAdapter(build_graph(dimensions), reader)

    if args.visual or args.record is not None:
        renderer = open_renderer(adapter, args, "replay")
        renderer.init_window()
        renderer.run_loop()
    else:
        count = adapter.run_all()
        logger.info(f"Applied {count} events.")


if __name__ == "__main__":
    main()
