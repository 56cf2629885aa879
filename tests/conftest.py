"""Pytest configuration and fixtures."""
import pytest
import yaml
from fx_paths.graph.rates import ConvertRate
from fx_paths.graph.registry import ConverterRegistry, ConverterType


@pytest.fixture(params=[ConverterType.DENSE, ConverterType.SPARSE], ids=["dense", "sparse"])
def converter_type(request):
    return request.param


@pytest.fixture
def make_converter(converter_type):
    """Build and init a converter of the parametrised type from (from, to, rate) triples."""
    def _make(triples, capacity=None):
        kwargs = {} if capacity is None else {"capacity": capacity}
        converter = ConverterRegistry.create(converter_type, **kwargs)
        converter.init([ConvertRate(f, t, fn if callable(fn) else constant(fn)) for f, t, fn in triples])
        return converter
    return _make


def constant(value):
    return lambda: value


@pytest.fixture
def config_file(tmp_path):
    """Write a small YAML config and return its path."""
    config_data = {
        'converter': {'type': 'dense', 'capacity': 16},
        'quotes': {
            'EUR_USD': 2.0,
            'USD_JPY': 100.0,
            'GBP_USD': 4.0,
            'NZD_AUD': 0.5
        },
        'queries': [
            {'amount': 10, 'from': 'EUR', 'to': 'JPY'},
            {'amount': 10, 'from': 'GBP', 'to': 'EUR'},
            {'amount': 10, 'from': 'EUR', 'to': 'AUD'}
        ]
    }
    path = tmp_path / "converter.yaml"
    with open(path, 'w') as f:
        yaml.safe_dump(config_data, f)
    return path
