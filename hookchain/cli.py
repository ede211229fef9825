"""CLI entrypoint for inspecting hook configuration files."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from hookchain.config import HooksConfig, load_effective_config, load_yaml_mapping
from hookchain.logging_utils import configure_logging
from hookchain.table import HookTable

logger = logging.getLogger(__name__)


def _load_config(args: argparse.Namespace) -> HooksConfig:
    path = Path(args.config)
    if not path.exists():
        raise ValueError(f"Hooks config not found: {path}")
    return load_effective_config(
        path=path,
        system_defaults=load_yaml_mapping(args.system_config) if args.system_config else None,
    )


def _run_describe(args: argparse.Namespace) -> int:
    config = _load_config(args)
    table = HookTable.from_config(config)
    summaries = table.summary()

    if args.json:
        print(json.dumps([summary.model_dump() for summary in summaries], indent=2))
        return 0

    print(f"Defaults: priority={config.defaults.priority} arity={config.defaults.arity} all_hook={config.all_hook}")
    for summary in summaries:
        print(f"{summary.name}: {len(summary.callbacks)} callback(s) priorities={summary.priorities}")
        for callback in summary.callbacks:
            print(f"  [{callback.priority}] {callback.name} arity={callback.arity} key={callback.key}")
    logger.info("Described %s hook(s)", len(summaries))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="hookchain hook table tools")
    parser.add_argument("--log-level", default="INFO", help="Logging level name (DEBUG, INFO, ...) or number")

    sub = parser.add_subparsers(dest="command", required=True)

    describe = sub.add_parser("describe", help="Load a hooks YAML file and list the resulting table")
    describe.add_argument("config", help="Path to a hooks YAML file")
    describe.add_argument("--system-config", default=None, help="Optional YAML with system-level defaults")
    describe.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "describe":
        return _run_describe(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
