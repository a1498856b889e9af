"""Domain value objects."""

from pgscope.domain.value_objects.fatal_error_class import FatalErrorClass
from pgscope.domain.value_objects.store_key import StoreKey

__all__ = [
    "FatalErrorClass",
    "StoreKey",
]
