"""
Command line entry point: ``python -m hexmosaic``.

Headless backends (memory, svg) are driven by a ManualTimer for a fixed
number of frames; the matplotlib backend opens an interactive window.
"""
import argparse
import logging
import sys

from hexmosaic._config import MosaicConfig, load_config
from hexmosaic._backend import FixedViewport, get_backend
from hexmosaic._logging import setup_logging
from hexmosaic._scheduler import AnimationScheduler, ManualTimer

logger = logging.getLogger("hexmosaic")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="hexmosaic",
        description="Tile a viewport with an animated honeycomb mosaic.")
    parser.add_argument("--width", type=float, default=800.0)
    parser.add_argument("--height", type=float, default=600.0)
    parser.add_argument("--radius", type=float, default=None,
                        help="hexagon radius (overrides the config file)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--frames", type=int, default=100,
                        help="ticks to run with a headless backend")
    parser.add_argument("--backend", choices=("memory", "svg", "matplotlib"),
                        default="svg")
    parser.add_argument("--output", default=None,
                        help="write the final frame to this SVG file")
    parser.add_argument("--config", default=None,
                        help="JSON file of configuration overrides")
    parser.add_argument("--log-level", default="INFO",
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    return parser


def run_headless(args, config):
    backend = get_backend(args.backend, stroke_width=config.stroke_width)
    timer = ManualTimer()
    scheduler = AnimationScheduler(FixedViewport(args.width, args.height),
                                   backend=backend, config=config,
                                   timer=timer, seed=args.seed)
    scheduler.start()
    while scheduler.ticks < args.frames and timer.run_next():
        pass
    scheduler.stop()

    logger.info("Ran %d ticks, final interval %.2f ms, hue %.1f",
                scheduler.ticks, scheduler.interval, scheduler.mosaic.hue)
    if args.output:
        if args.backend != "svg":
            raise SystemExit("--output requires the svg backend")
        backend.save(args.output)
        logger.info("Wrote %s", args.output)
    return scheduler


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    try:
        config = load_config(args.config) if args.config else MosaicConfig()
        if args.radius is not None:
            config.radius = args.radius
            config.validate()
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    if args.backend == "matplotlib":
        from hexmosaic._plotting import animate_mosaic
        dpi = 100
        animate_mosaic(config=config, seed=args.seed,
                       figsize=(args.width / dpi, args.height / dpi), dpi=dpi,
                       show=True)
        return 0

    run_headless(args, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
