"""
Converter registry for selecting the path engine from config.
"""
from enum import Enum
from typing import Dict, Type, Union
from fx_paths.graph.base import PathConverter
from fx_paths.graph.dense import DenseConverter
from fx_paths.graph.sparse import SparseConverter


class ConverterType(str, Enum):
    DENSE = "dense"    # incremental all-pairs tables, O(N²) memory
    SPARSE = "sparse"  # per-node BFS, faster on sparse graphs


class ConverterRegistry:
    _converters: Dict[str, Type[PathConverter]] = {}

    @classmethod
    def register(cls, name: Union[str, ConverterType]):
        """Decorator to register a converter class."""
        def decorator(converter_cls: Type[PathConverter]):
            cls._converters[cls._normalize(name)] = converter_cls
            return converter_cls
        return decorator

    @classmethod
    def create(cls, name: Union[str, ConverterType] = ConverterType.SPARSE, **kwargs) -> PathConverter:
        """Create converter instance by name (e.g. "dense", "SPARSE", ConverterType.DENSE)."""
        key = cls._normalize(name)
        if key not in cls._converters:
            raise ValueError(f"Unknown converter type: {name}. Registered: {cls.get_registered_names()}")
        return cls._converters[key](**kwargs)

    @classmethod
    def get_registered_names(cls) -> list:
        return list(cls._converters.keys())

    @staticmethod
    def _normalize(name: Union[str, ConverterType]) -> str:
        if isinstance(name, ConverterType):
            return name.value
        return str(name).strip().lower()


# Register built-in engines
ConverterRegistry.register(ConverterType.DENSE)(DenseConverter)
ConverterRegistry.register(ConverterType.SPARSE)(SparseConverter)
