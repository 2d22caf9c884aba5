"""
Registry of spec kinds, used by ``new(kind, **options)``.
"""
from typing import Any, Dict, Type

from utils.logging_config import get_logger
from utils.exceptions import SpecError

logger = get_logger(__name__)


class SpecFactory:
    """Creates specs by kind name."""

    _registry: Dict[str, Type] = {}

    @classmethod
    def register(cls, name: str, implementation: Type):
        """Register a spec class under a kind name."""
        cls._registry[name] = implementation
        logger.debug(f"Registered {name} in {cls.__name__}")

    @classmethod
    def create(cls, name: str, **options) -> Any:
        """Build a spec of the named kind."""
        if name not in cls._registry:
            raise SpecError(
                f"unknown spec kind: {name}",
                details={'available_kinds': cls.list_available()}
            )

        implementation = cls._registry[name]
        return implementation(**options)

    @classmethod
    def list_available(cls) -> list:
        """List all registered kind names."""
        return sorted(cls._registry)


def register_spec(name: str):
    """Decorator for registering spec classes."""
    def decorator(cls):
        SpecFactory.register(name, cls)
        return cls
    return decorator


def new(kind: str, **options) -> Any:
    """Build a spec of the named kind, e.g. ``new('integer', gte=0)``."""
    return SpecFactory.create(kind, **options)
