#roilens/domain/common/di_container.py

"""
Simple dependency injection container for the application.

One container is created per capture session; it owns the single region store
and the single image queue through singleton registrations.
"""
from typing import Any, Type, TypeVar, Callable, Dict


T = TypeVar('T')
TBase = TypeVar('TBase')


class DIContainer:
    """
    Simple dependency injection container.

    Manages service registrations and handles dependency resolution.
    """

    def __init__(self):
        self._instance_registrations: Dict[type, Any] = {}
        self._factory_registrations: Dict[type, Callable[[], Any]] = {}
        self._singleton_factories: Dict[type, Callable[[], Any]] = {}
        self._resolving = set()  # Tracks types being resolved to detect circular dependencies

    def register_instance(self, base_type: Type[TBase], instance: TBase) -> None:
        """Register an instance to be returned whenever base_type is requested."""
        self._instance_registrations[base_type] = instance

    def register_factory(self, base_type: Type[TBase], factory: Callable[[], TBase]) -> None:
        """Register a factory called on every resolution of base_type."""
        self._factory_registrations[base_type] = factory

    def register_singleton(self, base_type: Type[TBase], factory: Callable[[], TBase]) -> None:
        """
        Register a factory whose first result is kept and reused.

        Args:
            base_type: The type to register (typically an interface)
            factory: A function that creates the instance on first resolution
        """
        self._singleton_factories[base_type] = factory

    def is_registered(self, base_type: type) -> bool:
        return (base_type in self._instance_registrations
                or base_type in self._factory_registrations
                or base_type in self._singleton_factories)

    def resolve(self, base_type: Type[T]) -> T:
        """
        Resolve a type to its registered instance or create a new instance.

        Args:
            base_type: The type to resolve

        Returns:
            An instance of the requested type

        Raises:
            ValueError: If the type is not registered or there's a circular dependency
        """
        if base_type in self._resolving:
            raise ValueError(f"Circular dependency detected while resolving {base_type.__name__}")

        if base_type in self._instance_registrations:
            return self._instance_registrations[base_type]

        if base_type in self._singleton_factories:
            instance = self._create(base_type, self._singleton_factories[base_type])
            self._instance_registrations[base_type] = instance
            return instance

        if base_type in self._factory_registrations:
            return self._create(base_type, self._factory_registrations[base_type])

        raise ValueError(f"No registration found for {base_type.__name__}")

    def _create(self, base_type: type, factory: Callable[[], Any]) -> Any:
        self._resolving.add(base_type)
        try:
            return factory()
        finally:
            self._resolving.remove(base_type)
