"""CLI entry point for the WMM error toolkit."""

import argparse
import json
import logging

from wmmview.analysis.component_limits import (
    component_altitude_limit,
    limit_grid_summary,
)
from wmmview.config.loader import (
    config_hash,
    get_config_value,
    load_config,
    set_config_value,
)
from wmmview.config.schema import ErrorModel
from wmmview.ingest.dataset_loader import DatasetFormatError, load_activity_dataset
from wmmview.ingest.forecast_fetcher import build_forecast_fetcher, current_activity_level
from wmmview.models.common import Component
from wmmview.reporting.formatters import (
    format_activity_json,
    format_activity_text,
    format_grid_summary_text,
    format_limit_text,
    limit_result_to_dict,
)
from wmmview.storage.database import open_database
from wmmview.storage.forecast_cache import SqliteForecastCache

DEFAULT_CONFIG = "configs/default.yaml"
DEFAULT_DB = "data/wmmview.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wmmview",
        description="WMM error altitude limits and live geomagnetic activity",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite cache DB path")

    sub = parser.add_subparsers(dest="command")

    # forecast
    forecast_p = sub.add_parser("forecast", help="Show current G-scale from NOAA")
    forecast_p.add_argument("--json", action="store_true", help="JSON output")

    # limit / summary
    for name, help_text in (
        ("limit", "Altitude limit for a component profile"),
        ("summary", "Range of a precomputed altitude-limit grid"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--g-scale", type=int, required=True, choices=range(6))
        p.add_argument(
            "--component", required=True, choices=[c.value for c in Component]
        )
        p.add_argument(
            "--model", choices=[m.value for m in ErrorModel], default=None,
            help="Error model (default from config)",
        )
        p.add_argument("--json", action="store_true", help="JSON output")

    # cache clear
    cache_p = sub.add_parser("cache", help="Forecast cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    cache_sub.add_parser("clear", help="Drop the cached forecast")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "limit":
        return _cmd_limit(config, args)
    elif args.command == "summary":
        return _cmd_summary(config, args)
    elif args.command == "cache":
        return _cmd_cache(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _open_cache(config, args) -> SqliteForecastCache:
    conn = open_database(args.db)
    return SqliteForecastCache(conn, key=config.forecast.cache_key)


def _cmd_forecast(config, args) -> int:
    cache = _open_cache(config, args)
    fetcher = build_forecast_fetcher(config.forecast, cache)
    level = current_activity_level(fetcher)
    cache.conn.close()
    if args.json:
        print(format_activity_json(level))
    else:
        print(format_activity_text(level))
    return 0 if level.error is None else 1


def _cmd_limit(config, args) -> int:
    model = ErrorModel(args.model) if args.model else config.analysis.default_error_model
    try:
        dataset = load_activity_dataset(config.data.data_dir, args.g_scale)
        result = component_altitude_limit(
            dataset, Component(args.component), model, config
        )
    except (FileNotFoundError, DatasetFormatError) as e:
        print(f"Error: {e}")
        return 1
    if args.json:
        print(json.dumps(limit_result_to_dict(result), indent=2))
    else:
        print(format_limit_text(result))
    return 0


def _cmd_summary(config, args) -> int:
    model = ErrorModel(args.model) if args.model else config.analysis.default_error_model
    try:
        dataset = load_activity_dataset(config.data.data_dir, args.g_scale)
        summary = limit_grid_summary(dataset, Component(args.component), model)
    except (FileNotFoundError, DatasetFormatError) as e:
        print(f"Error: {e}")
        return 1
    print(format_grid_summary_text(summary))
    return 0


def _cmd_cache(config, args) -> int:
    if args.cache_command != "clear":
        print("Use: cache clear")
        return 1
    cache = _open_cache(config, args)
    build_forecast_fetcher(config.forecast, cache).clear_cache()
    cache.conn.close()
    print("Forecast cache cleared")
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        print(f"Config hash: {config_hash(config)}")
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
