#!/usr/bin/env python3
"""
Answer conversion queries from a YAML config.
Demonstrates config → quote book → path engine → conversion pipeline.
"""
import argparse
from typing import List, Optional
import pandas as pd
from fx_paths.core.logger import get_logger
from fx_paths.graph.registry import ConverterRegistry
from fx_paths.market.config_loader import DEFAULT_CONFIG, build_from_config, iter_queries, load_config
from fx_paths.market.report import conversion_matrix, path_table

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert amounts through fewest-hop FX paths")
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="Config file name or path")
    parser.add_argument(
        "--type",
        choices=ConverterRegistry.get_registered_names(),
        help="Override converter.type from config"
    )
    parser.add_argument("--matrix", action="store_true", help="Print full 1-unit conversion matrix")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    # 1. Load config
    config = load_config(args.config)
    if args.type:
        config.setdefault('converter', {})['type'] = args.type

    # 2. Build engine over configured quotes
    converter, index, _ = build_from_config(config)
    print(f"{converter.name}: {len(index)} currencies, {converter.rate_count} quoted rates")

    # 3. Answer queries
    queries = list(iter_queries(config))
    for amount, from_code, to_code in queries:
        result = converter.convert(amount, index.id_of(from_code), index.id_of(to_code))
        print(f"{amount:,.2f} {from_code} = {result:,.4f} {to_code}")
        logger.info(f"{amount} {from_code} → {to_code} = {result}")

    if queries:
        print()
        print(path_table(converter, index, [(q[1], q[2]) for q in queries]).to_string(index=False))

    # 4. Optional full matrix
    if args.matrix:
        with pd.option_context('display.width', 200, 'display.float_format', '{:,.5f}'.format):
            print()
            print(conversion_matrix(converter, index))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
