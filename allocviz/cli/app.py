from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv

from allocviz.config.loader import ConfigError, load_config
from allocviz.logging.error_log import ErrorLogBuffer
from allocviz.logging.init import log_summary, setup_logging
from allocviz.models.config_models import AppConfig
from allocviz.models.filter_spec import ALL, GroupDimension
from allocviz.services.ingestion import IngestionError, UnreadableInputError, ingest_file
from allocviz.services.progress import FileProgress
from allocviz.services.session import SessionContext
from allocviz.services.session_store import SessionStore
from allocviz.services.summary import format_total, render_summary_line

"""CLI entrypoint.

Subcommands:
- ingest FILE     load a CSV/TSV file into the saved session
- chart           apply filter/group changes, print group totals and preview rows
- options         list selectable products, branches, areas and groups
- inspect FILE..  print detected headers, roles and sample rows per file
- reset           clear the saved session
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_REJECTED = 2

_SUMMARY_PREFIX = "SUMMARY "


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="allocviz", description="Chart totals from messy CSV/TSV allocation files")
    p.add_argument("--config", type=Path, help="YAML config file (default: config/allocviz.yml)")
    p.add_argument("--session", type=Path, help="Session file (overrides session_path in config)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Load a delimited text file into the session")
    ingest.add_argument("file", type=Path)

    chart = sub.add_parser("chart", help="Print group totals for the current filters")
    chart.add_argument("--product", help=f"Product filter ('{ALL}' clears it)")
    chart.add_argument("--branch", help=f"Branch filter ('{ALL}' clears it)")
    chart.add_argument("--area", help=f"Area filter ('{ALL}' clears it, also clears branch)")
    chart.add_argument("--group", choices=[g.value for g in GroupDimension], help="Group chart by")

    sub.add_parser("options", help="List selectable filter values")

    inspect = sub.add_parser("inspect", help="Print headers, roles and first rows, then exit")
    inspect.add_argument("files", type=Path, nargs="+")

    sub.add_parser("reset", help="Clear the saved session")
    return p.parse_args(argv)


def _filter_changes(args: argparse.Namespace) -> dict[str, object]:
    changes: dict[str, object] = {}
    for name in ("product", "branch", "area"):
        value = getattr(args, name)
        if value is not None:
            changes[name] = None if value == ALL else value
    if args.group is not None:
        changes["group"] = GroupDimension(args.group)
    return changes


def _print_chart(ctx: SessionContext, preview_rows: int) -> None:
    result = ctx.aggregate()
    summary = ctx.summary()
    print(f"Total by {result.dimension.value} | {ctx.filter_description()} | {ctx.metric_label()}")
    print(f"rows={summary.rows} total={format_total(summary.total)}")
    if result.is_empty:
        print("No data")
        return
    frame = pd.DataFrame(list(result.pairs), columns=[result.dimension.label, "Total"])
    print(frame.to_string(index=False))

    preview = ctx.preview(preview_rows)
    if preview:
        print(f"Preview: first {len(preview)} of {summary.rows} rows")
        print(pd.DataFrame([r.to_dict() for r in preview]).to_string(index=False))


def _cmd_ingest(args: argparse.Namespace, cfg: AppConfig, store: SessionStore) -> int:
    logger = setup_logging()
    try:
        result = ingest_file(args.file, cfg.inference)
    except UnreadableInputError as e:
        logger.error(f"{e}")
        return EXIT_FATAL
    except IngestionError as e:
        logger.error(f"{args.file.name}: {e}")
        return EXIT_REJECTED

    ctx = SessionContext()
    state = ctx.load(result)
    store.save(state)
    logger.info(f"Loaded {len(state.records)} rows. Grouping by {state.filters.group.value}.")
    summary_line = render_summary_line(result)
    log_summary(summary_line[len(_SUMMARY_PREFIX):])
    return EXIT_SUCCESS


def _restore(store: SessionStore) -> SessionContext | None:
    state = store.load()
    if state is None:
        setup_logging().error("no saved session: run 'allocviz ingest FILE' first")
        return None
    return SessionContext(state)


def _cmd_chart(args: argparse.Namespace, cfg: AppConfig, store: SessionStore) -> int:
    ctx = _restore(store)
    if ctx is None:
        return EXIT_FATAL
    changes = _filter_changes(args)
    if changes:
        requested = changes.get("group")
        filters = ctx.update_filters(**changes)
        if requested is not None and filters.group != requested:
            setup_logging().info(f"no {requested.value} column; grouping by {filters.group.value}")
        store.save(ctx.state)
    _print_chart(ctx, cfg.preview_rows)
    return EXIT_SUCCESS


def _cmd_options(args: argparse.Namespace, cfg: AppConfig, store: SessionStore) -> int:
    ctx = _restore(store)
    if ctx is None:
        return EXIT_FATAL
    schema = ctx.state.schema
    print("products: " + ", ".join(ctx.product_options()))
    print("branches: " + (", ".join(ctx.branch_options()) if schema.branch_key else "(no branch column)"))
    print("areas: " + (", ".join(ctx.area_options()) if schema.area_key else "(no area column)"))
    print("groups: " + ", ".join(g.value for g in ctx.group_options()))
    print(f"filters: {ctx.filter_description()} group={ctx.state.filters.group.value}")
    return EXIT_SUCCESS


def _cmd_inspect(args: argparse.Namespace, cfg: AppConfig, store: SessionStore) -> int:
    logger = setup_logging()
    error_log = ErrorLogBuffer()
    failed = 0
    with FileProgress(len(args.files)) as progress:
        for f in args.files:
            progress.start_file(f)
            try:
                result = ingest_file(f, cfg.inference)
            except IngestionError as e:
                failed += 1
                error_log.record(f.name, e)
                logger.warning(f"{f.name}: {e}")
                print(f"FILE: {f.name} error={e}")
                progress.finish_file(success=False)
                continue
            schema = result.schema
            print(f"FILE: {f.name} delimiter={result.table.delimiter!r} header_row={result.table.header_index}")
            print(f"  headers={result.table.headers}")
            print(
                f"  roles product={schema.product_key} branch={schema.branch_key} area={schema.area_key} "
                f"item={schema.item_key} metric={schema.metric_key}"
            )
            print(f"  product_columns={list(schema.product_columns)}")
            if schema.synthetic_product:
                print(f"  synthetic_product={schema.synthetic_product_label!r}")
            sample = result.table.rows[: cfg.preview_rows]
            if sample:
                print(pd.DataFrame(sample).to_string(index=False))
            progress.finish_file(success=True)

    path = error_log.flush()
    if path is not None:
        logger.info(f"error log written: {path}")
    return EXIT_REJECTED if failed else EXIT_SUCCESS


def _cmd_reset(args: argparse.Namespace, cfg: AppConfig, store: SessionStore) -> int:
    store.clear()
    setup_logging().info("Session cleared. Waiting for a CSV file.")
    return EXIT_SUCCESS


_COMMANDS = {
    "ingest": _cmd_ingest,
    "chart": _cmd_chart,
    "options": _cmd_options,
    "inspect": _cmd_inspect,
    "reset": _cmd_reset,
}


def main(argv: list[str] | None = None) -> int:
    # Only read the process arguments when none are given (tests pass lists)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    # .env may point ALLOCVIZ_CONFIG at a project-specific config
    load_dotenv(dotenv_path=Path(".env"), override=False)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    store = SessionStore(args.session or cfg.session_path)
    return _COMMANDS[args.command](args, cfg, store)
