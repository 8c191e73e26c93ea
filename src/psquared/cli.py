import argparse
import json
import math
import sys
from typing import IO, Iterator, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import EstimatorConfig, QUANTILE_PRESETS
from .errors import P2Error
from .histogram import HistogramEstimator
from .logutil import get_logger
from .metrics import Estimator, estimator_metrics
from .parsers import parse_value
from .quantile import QuantileEstimator


def _maybe_console(args: argparse.Namespace) -> Optional[Console]:
    if getattr(args, "no_color", False):
        return None
    # force_terminal ensures ANSI codes even when output is being captured (for tests)
    return Console(color_system="truecolor", stderr=False, force_terminal=True)


def _open_input(path: str) -> IO[str]:
    if path == "-":
        return sys.stdin
    return open(path, "r", encoding="utf-8", errors="replace")


def iter_values(handle: IO[str], field: Optional[str] = None) -> Iterator[float]:
    """Yield parsed observations; unparseable lines are logged and skipped."""
    log = get_logger()
    for lineno, line in enumerate(handle, start=1):
        value = parse_value(line, field=field)
        if value is None:
            if line.strip() and not line.lstrip().startswith("#"):
                log.warning("line %d: no numeric value in %r", lineno, line.strip()[:80])
            continue
        yield value


def _fmt(value: Optional[float], precision: int) -> str:
    if value is None:
        return "n/a"
    return f"{value:.{precision}g}"


def render(est: Estimator, console: Optional[Console], precision: int) -> None:
    snap = estimator_metrics(est)
    title = repr(est)
    if console is not None:
        table = Table(title=title)
        table.add_column("marker", justify="right", style="cyan")
        table.add_column("label", style="magenta")
        table.add_column("estimate", justify="right", style="green")
        table.add_column("count", justify="right")
        for row in snap["markers"]:
            table.add_row(str(row["marker"]), row["label"], _fmt(row["estimate"], precision), str(row["count"]))
        console.print(table)
        if not snap["ready"]:
            console.print(Text(f"not ready: need {est.markers} values", style="yellow"))
        return
    print(title)
    for row in snap["markers"]:
        print(f"{row['marker']:>5} {row['label']:>10} {_fmt(row['estimate'], precision):>14} {row['count']:>10}")
    if not snap["ready"]:
        print(f"not ready: need {est.markers} values")


def _write_json(est: Estimator, path: str) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(estimator_metrics(est), fh, indent=2, allow_nan=False)
    print(f"Wrote JSON {path}")


def _run(est: Estimator, args: argparse.Namespace, cfg: EstimatorConfig) -> int:
    try:
        handle = _open_input(args.file)
    except OSError as exc:
        print(f"[psquared] cannot read {args.file}: {exc}", file=sys.stderr)
        return 2
    accepted = 0
    try:
        for value in iter_values(handle, field=getattr(args, "field", None)):
            current = est.add(value)
            if math.isnan(value):
                continue
            accepted += 1
            if cfg.progress_every and accepted % cfg.progress_every == 0 and current is not None:
                print(f"[{accepted}] estimate={_fmt(None if math.isnan(current) else current, cfg.precision)}")
    finally:
        if handle is not sys.stdin:
            handle.close()
    if getattr(args, "json", None):
        _write_json(est, args.json)
    render(est, _maybe_console(args), cfg.precision)
    return 0


def cmd_quantile(args: argparse.Namespace) -> int:
    cfg = EstimatorConfig()
    if args.preset:
        cfg.p = QUANTILE_PRESETS[args.preset]
    if args.p is not None:
        cfg.p = args.p
    cfg.precision = args.precision
    cfg.progress_every = max(0, args.every or 0)
    try:
        est = QuantileEstimator(cfg.p)
    except P2Error as exc:
        print(f"[psquared] error: {exc}", file=sys.stderr)
        return 2
    return _run(est, args, cfg)


def cmd_histogram(args: argparse.Namespace) -> int:
    cfg = EstimatorConfig()
    if args.buckets is not None:
        cfg.buckets = args.buckets
    cfg.precision = args.precision
    try:
        est = HistogramEstimator(cfg.buckets)
    except P2Error as exc:
        print(f"[psquared] error: {exc}", file=sys.stderr)
        return 2
    return _run(est, args, cfg)


def cmd_bench(args: argparse.Namespace) -> int:  # pragma: no cover - covered via integration test
    try:
        from bench.benchmark import run
    except ImportError as exc:
        print(f"[psquared] bench harness import failed: {exc}", file=sys.stderr)
        return 2
    try:
        run(args.samples, p=args.p, buckets=args.buckets, seed=args.seed)
    except P2Error as exc:
        print(f"[psquared] error: {exc}", file=sys.stderr)
        return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="psquared", description="Streaming quantile and histogram estimates (P² algorithm).")
    # Global --version (argparse will exit 0 before validating subcommands)
    parser.add_argument(
        "--version",
        action="version",
        version=f"psquared {__version__}",
        help="Show version and exit",
    )
    sub = parser.add_subparsers(dest="cmd")

    quantile_parser = sub.add_parser("quantile", help="Estimate one quantile of a stream of numbers")
    quantile_parser.add_argument("file", help="Input file, one value per line ('-' for stdin)")
    quantile_parser.add_argument("--p", type=float, help="Target probability, 0 < p < 1 (default 0.5)")
    quantile_parser.add_argument("--preset", choices=sorted(QUANTILE_PRESETS.keys()), help="Named target probability")
    quantile_parser.add_argument("--field", help="JSON key holding the value for JSON-lines input")
    quantile_parser.add_argument("--every", type=int, help="Print the running estimate every N values")
    quantile_parser.add_argument("--precision", type=int, default=6, help="Significant digits to print")
    quantile_parser.add_argument("--json", help="Write the marker snapshot as JSON to this path")
    quantile_parser.add_argument("--no-color", action="store_true", help="Disable colorized output")
    quantile_parser.set_defaults(func=cmd_quantile)

    histogram_parser = sub.add_parser("histogram", help="Estimate equiprobable bucket boundaries")
    histogram_parser.add_argument("file", help="Input file, one value per line ('-' for stdin)")
    histogram_parser.add_argument("--buckets", type=int, help="Number of buckets, 4..65534 (default 10)")
    histogram_parser.add_argument("--field", help="JSON key holding the value for JSON-lines input")
    histogram_parser.add_argument("--precision", type=int, default=6, help="Significant digits to print")
    histogram_parser.add_argument("--json", help="Write the marker snapshot as JSON to this path")
    histogram_parser.add_argument("--no-color", action="store_true", help="Disable colorized output")
    histogram_parser.set_defaults(func=cmd_histogram)

    bench_parser = sub.add_parser("bench", help="Measure add() throughput on synthetic data")
    bench_parser.add_argument("--samples", type=int, default=100000, help="Values to feed each estimator")
    bench_parser.add_argument("--p", type=float, default=0.99, help="Quantile estimator target")
    bench_parser.add_argument("--buckets", type=int, default=10, help="Histogram estimator buckets")
    bench_parser.add_argument("--seed", type=int, default=42)
    bench_parser.set_defaults(func=cmd_bench)

    version_parser = sub.add_parser("version", help="Show version and exit")
    version_parser.set_defaults(func=lambda _: (print(f"psquared {__version__}"), 0)[1])

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    if not getattr(args, "cmd", None):  # No subcommand provided
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
