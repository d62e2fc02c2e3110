"""Variant registry — the closed set of concrete types behind a polymorphic contract.

A contract is an abstract class or a ``typing.Protocol``.  Variants are
declared explicitly with :func:`register_variant`; abstract classes with no
registered variants fall back to their concrete subclasses in definition
order.  Protocol implementations are structural and can only be found
through the registry.

Usage::

    class Shape(ABC):
        @abstractmethod
        def area(self) -> float: ...

    @register_variant(Shape)
    class Circle(Shape):
        radius: float
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

_T = TypeVar("_T", bound=type)


class VariantRegistry:
    """Maps each polymorphic contract to its concrete variants, in registration order."""

    def __init__(self) -> None:
        self._variants: dict[type, list[type]] = {}

    def register(self, contract: type, variant: type) -> None:
        if inspect.isabstract(variant):
            msg = f"Cannot register abstract class {variant.__name__} as a variant"
            raise TypeError(msg)
        variants = self._variants.setdefault(contract, [])
        if variant not in variants:
            variants.append(variant)

    def is_contract(self, tp: Any) -> bool:
        """Return ``True`` if *tp* should be described as ``oneOf`` its variants."""
        if not isinstance(tp, type):
            return False
        return tp in self._variants or inspect.isabstract(tp) or _is_protocol(tp)

    def variants(self, contract: type) -> list[type]:
        registered = self._variants.get(contract)
        if registered:
            return list(registered)
        return _concrete_subclasses(contract)

    def clear(self) -> None:
        self._variants.clear()


def _is_protocol(tp: type) -> bool:
    return bool(getattr(tp, "_is_protocol", False)) and tp is not Protocol


def _concrete_subclasses(contract: type) -> list[type]:
    found: list[type] = []
    stack = list(reversed(contract.__subclasses__()))
    while stack:
        cls = stack.pop()
        if cls not in found and not inspect.isabstract(cls) and not _is_protocol(cls):
            found.append(cls)
        stack.extend(reversed(cls.__subclasses__()))
    return found


default_variants = VariantRegistry()


def register_variant(contract: type, registry: VariantRegistry | None = None) -> Callable[[_T], _T]:
    """Class decorator declaring the decorated class a variant of *contract*."""
    target = registry or default_variants

    def decorator(cls: _T) -> _T:
        target.register(contract, cls)
        return cls

    return decorator
