import pytest
from fx_paths.graph.dense import DenseConverter
from fx_paths.graph.registry import ConverterRegistry, ConverterType
from fx_paths.graph.sparse import SparseConverter


@pytest.mark.parametrize("name,expected", [
    (ConverterType.DENSE, DenseConverter),
    (ConverterType.SPARSE, SparseConverter),
    ("dense", DenseConverter),
    ("SPARSE", SparseConverter),
    (" Dense ", DenseConverter),
])
def test_create_by_name(name, expected):
    converter = ConverterRegistry.create(name, capacity=4)
    assert isinstance(converter, expected)
    assert converter.capacity == 4


def test_default_is_sparse():
    assert isinstance(ConverterRegistry.create(), SparseConverter)


def test_unknown_name_raises():
    with pytest.raises(ValueError, match="Unknown converter type"):
        ConverterRegistry.create("floyd")


def test_registered_names():
    assert set(ConverterRegistry.get_registered_names()) >= {"dense", "sparse"}


def test_invalid_capacity_raises():
    with pytest.raises(ValueError):
        ConverterRegistry.create(ConverterType.DENSE, capacity=0)
