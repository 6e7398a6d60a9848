from __future__ import annotations

import random
from pathlib import Path

import typer

from .debug_log import playback_debug_session
from .generate import Distribution
from .paths import default_runtime_dir
from .playback import encode_stats
from .session import record_sort, replay_headless
from .sorts import SortEntry, all_sorts, sort_by_name

app = typer.Typer(add_completion=False)

_BASE_DIR_HELP = "base path for runtime files (default: per-user OS data dir; override with SORTVIZ_RUNTIME_DIR)"


def _resolve_sort(name: str) -> SortEntry:
    try:
        return sort_by_name(name)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _resolve_distribution(name: str) -> Distribution:
    try:
        return Distribution.parse(name)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _check_size(size: int) -> int:
    if size < 0:
        typer.echo(f"size must be non-negative, got {size}", err=True)
        raise typer.Exit(code=1)
    return int(size)


@app.callback(invoke_without_command=True)
def cmd_view(
    ctx: typer.Context,
    sort: str | None = typer.Option(None, help="sort to visualize (default: use sortviz.cfg)"),
    size: int | None = typer.Option(None, help="array size (default: use sortviz.cfg)"),
    distribution: str | None = typer.Option(None, help="initial distribution (default: use sortviz.cfg)"),
    seed: int | None = typer.Option(None, help="rng seed for array generation"),
    width: int | None = typer.Option(None, help="window width (default: use sortviz.cfg)"),
    height: int | None = typer.Option(None, help="window height (default: use sortviz.cfg)"),
    fps: int | None = typer.Option(None, help="target fps (default: use sortviz.cfg)"),
    interval_hz: int | None = typer.Option(
        None,
        "--interval-hz",
        help="pace ticks with a fixed-interval timer instead of display refresh",
    ),
    debug_log: bool = typer.Option(False, "--debug-log", help="write playback events under base-dir/logs"),
    base_dir: Path = typer.Option(default_runtime_dir(), "--base-dir", "--runtime-dir", help=_BASE_DIR_HELP),
) -> None:
    """Open a window and animate a recorded sort (default command)."""
    if ctx.invoked_subcommand:
        return
    from .app import run_view
    from .config import FrameSourceKind, ensure_sortviz_cfg
    from .views import SortPlaybackView, SortViewConfig

    base_dir.mkdir(parents=True, exist_ok=True)
    cfg = ensure_sortviz_cfg(base_dir)
    entry = _resolve_sort(sort if sort is not None else cfg.sort_name)
    dist = _resolve_distribution(distribution) if distribution is not None else cfg.distribution
    size = _check_size(size if size is not None else cfg.array_size)
    if interval_hz is None and cfg.frame_source == FrameSourceKind.INTERVAL:
        interval_hz = cfg.interval_hz
    if width is None:
        width = cfg.screen_width
    if height is None:
        height = cfg.screen_height
    if fps is None:
        fps = cfg.target_fps

    view = SortPlaybackView(
        SortViewConfig(
            sort=entry,
            size=size,
            distribution=dist,
            cycles_per_tick=cfg.cycles_per_tick,
            restore_threshold=cfg.restore_threshold,
            interval_hz=interval_hz,
            seed=seed,
        ),
        width=width,
        height=height,
    )
    with playback_debug_session(
        enabled=debug_log,
        base_dir=base_dir,
        sort=entry.name,
        size=size,
        distribution=str(dist),
    ) as log_path:
        if log_path is not None:
            typer.echo(f"debug log: {log_path}")
        run_view(view, width=width, height=height, title=f"sortviz - {entry.title}", fps=fps)


@app.command("sorts")
def cmd_sorts() -> None:
    """List the registered sort drivers."""
    for entry in all_sorts():
        typer.echo(f"{entry.name:10s}  {entry.title}")


@app.command("trace")
def cmd_trace(
    sort: str = typer.Argument(..., help="sort name (see `sortviz sorts`)"),
    size: int = typer.Option(16, help="array size"),
    distribution: str = typer.Option("random", help="initial distribution"),
    seed: int | None = typer.Option(None, help="rng seed for array generation"),
    limit: int | None = typer.Option(None, help="print at most this many steps"),
) -> None:
    """Record a sort and print its steps in call order."""
    entry = _resolve_sort(sort)
    dist = _resolve_distribution(distribution)
    trace = record_sort(entry.driver, _check_size(size), dist, rng=random.Random(seed))
    typer.echo(f"{entry.title} n={trace.size} {dist} ({len(trace)} steps)")
    steps = trace.steps if limit is None else trace.steps[: max(0, int(limit))]
    for idx, step in enumerate(steps):
        typer.echo(f"{idx:05d}  {step.kind:5s}  index={step.index:4d}  value={step.value}")


@app.command("stats")
def cmd_stats(
    sort: str = typer.Argument(..., help="sort name (see `sortviz sorts`)"),
    size: int = typer.Option(50, help="array size"),
    distribution: str = typer.Option("random", help="initial distribution"),
    seed: int | None = typer.Option(None, help="rng seed for array generation"),
    cycles_per_tick: int = typer.Option(10, help="cycle budget per playback tick"),
    restore_threshold: int = typer.Option(20, help="ticks before a highlighted column settles"),
    as_json: bool = typer.Option(False, "--json", help="print JSON"),
) -> None:
    """Replay a sort without a window and print its operation statistics."""
    entry = _resolve_sort(sort)
    dist = _resolve_distribution(distribution)
    trace = record_sort(entry.driver, _check_size(size), dist, rng=random.Random(seed))
    try:
        engine = replay_headless(trace, cycles_per_tick=cycles_per_tick, restore_threshold=restore_threshold)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    report = engine.stats(sort=entry.name, distribution=str(dist))
    if as_json:
        typer.echo(encode_stats(report).decode("utf-8"))
        return
    typer.echo(f"{entry.title} n={report.size} {report.distribution}")
    typer.echo(f"steps: {report.steps}")
    typer.echo(f"cmp: {report.cmp}  swap: {report.swap}  copy: {report.copy}  set: {report.set}")
    typer.echo(f"cycles: {report.cycles}  ticks: {report.ticks}")


@app.command("config")
def cmd_config(
    path: Path | None = typer.Option(None, help="path to sortviz.cfg (default: base-dir/sortviz.cfg)"),
    base_dir: Path = typer.Option(default_runtime_dir(), "--base-dir", "--runtime-dir", help=_BASE_DIR_HELP),
) -> None:
    """Inspect sortviz.cfg configuration values."""
    from .config import SORTVIZ_CFG_NAME, SORTVIZ_CFG_STRUCT, load_sortviz_cfg

    cfg_path = path if path is not None else base_dir / SORTVIZ_CFG_NAME
    try:
        config = load_sortviz_cfg(cfg_path)
        summary = [
            f"path: {config.path}",
            f"screen: {config.screen_width}x{config.screen_height}",
            f"sort: {config.sort_name}",
            f"distribution: {config.distribution}",
        ]
    except (OSError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    for line in summary:
        typer.echo(line)
    typer.echo("fields:")
    for sub in SORTVIZ_CFG_STRUCT.subcons:
        name = sub.name
        if not name:
            continue
        typer.echo(f"{name}: {_format_cfg_value(config.data[name])}")


def _format_cfg_value(value: object) -> str:
    if isinstance(value, (bytes, bytearray)):
        length = len(value)
        prefix = value.split(b"\x00", 1)[0]
        if prefix and all(32 <= b < 127 for b in prefix):
            text = prefix.decode("ascii", errors="replace")
            return f"{text!r} (len={length})"
        return f"0x{bytes(value).hex()} (len={length})"
    return str(value)


def main(argv: list[str] | None = None) -> None:
    app(prog_name="sortviz", args=argv)


if __name__ == "__main__":
    main()
