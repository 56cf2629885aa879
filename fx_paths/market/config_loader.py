"""
YAML-driven construction of converter, currency index and quote book.
"""
from pathlib import Path
from typing import Tuple, Union
import logging
import yaml
from fx_paths.core.utils import MAX_NODES
from fx_paths.graph.base import PathConverter
from fx_paths.graph.registry import ConverterRegistry, ConverterType
from fx_paths.market.currency_index import CurrencyIndex
from fx_paths.market.quote_book import QuoteBook
from fx_paths.utils.project_paths import CONFIG_DIR

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "converter.yaml"


def load_config(config_name: Union[str, Path] = DEFAULT_CONFIG) -> dict:
    """
    Load YAML config by file name (looked up in CONFIG_DIR) or explicit path.

    Expected layout:
      converter:
        type: sparse        # dense | sparse
        capacity: 2000
      quotes:
        EUR_USD: 1.08
      queries:
        - {amount: 100, from: EUR, to: JPY}
    """
    config_path = Path(config_name)
    if not config_path.is_absolute() and not config_path.exists():
        config_path = CONFIG_DIR / config_path

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")
    logger.info(f"Loaded config {config_path}")
    return config


def build_from_config(config: dict) -> Tuple[PathConverter, CurrencyIndex, QuoteBook]:
    """Create and init the configured engine over the configured quotes"""
    converter_cfg = config.get('converter') or {}
    if not isinstance(converter_cfg, dict):
        raise ValueError("Config key 'converter' must be a mapping")

    converter_type = converter_cfg.get('type', ConverterType.SPARSE.value)
    capacity = converter_cfg.get('capacity', MAX_NODES)
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise ValueError(f"Config key 'converter.capacity' must be a positive integer, got {capacity!r}")

    quotes = config.get('quotes') or {}
    if not isinstance(quotes, dict):
        raise ValueError("Config key 'quotes' must be a mapping of instrument → price")

    book = QuoteBook(quotes)
    index = CurrencyIndex(capacity=capacity)
    rates = book.build_rates(index)

    converter = ConverterRegistry.create(converter_type, capacity=capacity)
    converter.init(rates)
    logger.info(f"Built {converter.name} over {len(index)} currencies from config")
    return converter, index, book


def iter_queries(config: dict):
    """Yield (amount, from_code, to_code) for each configured query"""
    for i, query in enumerate(config.get('queries') or []):
        try:
            yield float(query['amount']), str(query['from']), str(query['to'])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed query #{i} in config: {query!r}") from e
