# cli.py
#
# `sortviz` console script: record a trace to JSON, play one back, or run the
# randomised self-test.

import argparse
import logging
import sys
from pathlib import Path

from .array_generator import generate_array
from .config import DEFAULT_CONFIG, load_config
from .dispatcher import ALGORITHMS, record
from .errors import InvalidConfigurationError, SortVizError
from .evaluate_accuracy import DEFAULT_MAX_LENGTH, DEFAULT_TRIALS, all_passed, evaluate_algorithms
from .renderer import BarChartRenderer
from .style_merger import resolve_styles
from .validate import dump_trace
from .visualizer import Visualizer


def parse_array(text):
    try:
        return [int(v) for v in text.split(",") if v.strip()]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected comma separated integers, got '{text}'") from e


def build_parser():
    parser = argparse.ArgumentParser(prog="sortviz", description="Record and replay sorting algorithm traces")
    parser.add_argument("--config", help="Path to a JSON file of configuration overrides")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-step detail")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_array_args(p):
        p.add_argument("algorithm", choices=ALGORITHMS, nargs="?", help="Algorithm to run")
        p.add_argument("--array", type=parse_array, help="Explicit input, e.g. 5,3,8,1")
        p.add_argument("--size", type=int, help="Length of the random input")
        p.add_argument("--min", dest="min_value", type=int, help="Smallest random value")
        p.add_argument("--max", dest="max_value", type=int, help="Largest random value")
        p.add_argument("--seed", type=int, help="Random seed")

    p_record = sub.add_parser("record", help="Record a trace and save it as JSON")
    add_array_args(p_record)
    p_record.add_argument("--output", default="trace.json", help="Output JSON file path")

    p_play = sub.add_parser("play", help="Play a trace back in-process")
    add_array_args(p_play)
    p_play.add_argument("--delay-ms", type=float, help="Delay per step in milliseconds")
    p_play.add_argument("--sound", action="store_true", help="Emit tone events")
    p_play.add_argument("--dark", action="store_true", help="Use the dark theme for frames")
    p_play.add_argument("--live", action="store_true", help="Drive the algorithm live instead of from a recorded trace")
    p_play.add_argument("--frames-dir", help="Save PNG frames to this directory")
    p_play.add_argument("--frame-every", type=int, default=1, help="Save a frame every K display events")

    p_verify = sub.add_parser("verify", help="Check every algorithm against sorted() on random arrays")
    p_verify.add_argument("--trials", type=int, default=DEFAULT_TRIALS)
    p_verify.add_argument("--max-length", type=int, default=DEFAULT_MAX_LENGTH)
    p_verify.add_argument("--seed", type=int)
    p_verify.add_argument("--algorithms", nargs="+", choices=ALGORITHMS, default=list(ALGORITHMS))

    return parser


def setup_logging(verbose=False, log_file=None):
    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s: %(message)s',
        handlers=handlers,
        force=True,
    )


def resolve_config(args):
    config = load_config(args.config) if args.config else DEFAULT_CONFIG
    overrides = {
        "algorithm": getattr(args, "algorithm", None),
        "array_length": getattr(args, "size", None),
        "min_value": getattr(args, "min_value", None),
        "max_value": getattr(args, "max_value", None),
        "seed": getattr(args, "seed", None),
        "delay_ms": getattr(args, "delay_ms", None),
    }
    for flag, field in (("sound", "sound"), ("dark", "dark_theme"), ("live", "live")):
        if getattr(args, flag, False):
            overrides[field] = True
    return config.updated(**{k: v for k, v in overrides.items() if v is not None})


def input_array(args, config):
    if args.array is not None:
        return args.array
    return generate_array(config.array_length, config.min_value, config.max_value, config.seed)


def cmd_record(args):
    config = resolve_config(args)
    array = input_array(args, config)
    trace = record(config.algorithm, array)
    counts = trace.counts()
    logging.info(f"Recorded {config.algorithm} over {len(array)} elements: "
                 f"{counts['steps']} steps, {counts['comparisons']} comparisons, {counts['swaps']} swaps")
    dump_trace(trace, args.output)
    return 0


def cmd_play(args):
    config = resolve_config(args)
    array = input_array(args, config)
    visualizer = Visualizer(config, array=array)

    if args.frames_dir:
        renderer = BarChartRenderer(array, styles=resolve_styles(config.dark_theme),
                                    output_dir=args.frames_dir, frame_every=args.frame_every)
        visualizer.subscribe(renderer)

    try:
        state = visualizer.start(block=True)
    except KeyboardInterrupt:
        visualizer.stop()
        state = visualizer.state

    stats = visualizer.stats.snapshot()
    logging.info(f"Run {state.status.value}: {state.step_index} steps, {stats['comparisons']} comparisons, "
                 f"{stats['swaps']} swaps, {stats['elapsed']:.3f}s")
    logging.info(f"Final array: {visualizer.display_array}")
    return 0


def cmd_verify(args):
    if args.trials <= 0 or args.max_length <= 0:
        raise InvalidConfigurationError("--trials and --max-length must be positive")
    report = evaluate_algorithms(args.algorithms, trials=args.trials, max_length=args.max_length, seed=args.seed)
    for name, stats in report.items():
        print(f"{name:<10} passed {stats['passed']:>5}  failed {stats['failed']:>5}")
    return 0 if all_passed(report) else 1


COMMANDS = {
    "record": cmd_record,
    "play": cmd_play,
    "verify": cmd_verify,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)
    logging.info(f"Args: {vars(args)}")

    try:
        return COMMANDS[args.command](args)
    except SortVizError as e:
        logging.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
