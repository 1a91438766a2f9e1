"""Command line entry point for the clique viewer.

Example usage::

    clique-viewer render --graph graph.js --cliques sol.js --index 3 --out frame.svg --open
    clique-viewer play --graph graph.json --cliques cliques.json --ticks 20 --select 0 5 9
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
import webbrowser
from typing import List, Optional

from .config import ViewerConfig
from .engine import CliqueEngine

LOGGER = logging.getLogger(__name__)

EXIT_LOAD_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="clique-viewer", description="Step through precomputed cliques of a graph.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--datasource", default="json", help="Datasource plugin name (default: json)")
    parser.add_argument("--visualizer", default="circular", help="Visualizer plugin name (default: circular)")

    sub = parser.add_subparsers(dest="command", required=True)

    def add_data_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--graph", required=True, help="Graph adjacency file (.json or exported .js)")
        p.add_argument("--cliques", required=True, help="Clique catalog file (.json or exported .js)")

    render = sub.add_parser("render", help="Render one selection to an SVG file")
    add_data_args(render)
    render.add_argument("--index", type=int, default=0, help="Selector value (clamped to the catalog)")
    render.add_argument("--out", default="clique_frame.svg", help="Output SVG path")
    render.add_argument("--open", action="store_true", help="Open the result in the browser")

    play = sub.add_parser("play", help="Run the draw loop headless")
    add_data_args(play)
    play.add_argument("--ticks", type=int, default=8, help="Number of ticks to run")
    play.add_argument(
        "--select",
        type=int,
        nargs="*",
        default=None,
        help="Selector values applied one per tick before the loop settles",
    )

    return parser


def _render(engine: CliqueEngine, args: argparse.Namespace) -> int:
    svg = engine.render_selection(args.index)
    LOGGER.info("Rendered clique #%s %s", engine.rendered_index(), engine.catalog[engine.current_index()].to_list())

    out_dir = os.path.dirname(os.path.abspath(args.out))
    os.makedirs(out_dir, exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        f.write(svg)
    print(f"Wrote {args.out}")

    if args.open:
        abs_path = os.path.abspath(args.out)
        webbrowser.open(f"file:///{abs_path.replace(os.sep, '/')}")
    return 0


def _play(engine: CliqueEngine, args: argparse.Namespace) -> int:
    selections = list(args.select or [])
    for tick in range(args.ticks):
        if selections:
            engine.select(selections.pop(0))
        if engine.tick():
            print(f"tick {tick}: clique #{engine.rendered_index()} {engine.catalog[engine.rendered_index()].to_list()}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        engine = CliqueEngine.from_registry(args.datasource, args.visualizer, ViewerConfig.from_env())
        engine.load_files(args.graph, args.cliques)
    except (ValueError, FileNotFoundError) as exc:
        LOGGER.error("Failed to load data: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    if args.command == "render":
        return _render(engine, args)
    return _play(engine, args)


if __name__ == "__main__":
    sys.exit(main())
