"""
Behavior registry for managing available behaviors.

Maps the behavior names used in schema definitions to behavior classes.
"""

from typing import Dict, Type, Optional, Any, List, Mapping

from .behaviors.base import Behavior


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class BehaviorRegistry:
    """Registry for managing available behaviors."""

    def __init__(self):
        """Initialize empty registry."""
        self._behaviors: Dict[str, Type[Behavior]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: str,
        behavior_class: Type[Behavior],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a behavior class.

        Args:
            name: Primary behavior name (e.g., 'timestampable')
            behavior_class: Class implementing Behavior
            aliases: Alternative names for this behavior
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If behavior class is invalid or conflicts exist
        """
        if not isinstance(behavior_class, type) or not issubclass(behavior_class, Behavior):
            raise RegistryError("Behavior class must inherit from Behavior")

        name_key = name.lower()

        if name_key in self._behaviors and not replace:
            return

        self._behaviors[name_key] = behavior_class

        for alias in aliases or []:
            alias_key = alias.lower()

            if alias_key == name_key:
                continue

            if not replace:
                if alias_key in self._behaviors:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing behavior name"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != name_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = name_key

    def unregister(self, name: str):
        """
        Unregister a behavior and its aliases.

        Args:
            name: Behavior name to unregister
        """
        name_key = name.lower()
        self._behaviors.pop(name_key, None)

        aliases_to_remove = [
            alias for alias, target in self._aliases.items() if target == name_key
        ]
        for alias in aliases_to_remove:
            del self._aliases[alias]

    def get_behavior_class(self, name: str) -> Type[Behavior]:
        """
        Get behavior class by name or alias.

        Raises:
            RegistryError: If behavior not found
        """
        name_key = name.lower()

        if name_key in self._behaviors:
            return self._behaviors[name_key]

        if name_key in self._aliases:
            return self._behaviors[self._aliases[name_key]]

        available = self.list_behaviors()
        raise RegistryError(
            f"No behavior registered with name: {name}. "
            f"Available: {', '.join(available) or 'none'}"
        )

    def create_behavior(
        self, name: str, parameters: Optional[Mapping[str, str]] = None
    ) -> Behavior:
        """
        Create a behavior instance with parameter overrides.

        Args:
            name: Behavior name or alias
            parameters: Parameter overrides from the schema definition

        Returns:
            New, unattached behavior instance
        """
        behavior_class = self.get_behavior_class(name)
        return behavior_class(parameters)

    def list_behaviors(self) -> List[str]:
        """Get list of registered primary behavior names."""
        return sorted(self._behaviors.keys())

    def get_aliases_for_behavior(self, name: str) -> List[str]:
        name_key = name.lower()
        return sorted(
            alias for alias, target in self._aliases.items() if target == name_key
        )

    def is_supported(self, name: str) -> bool:
        """Check if a behavior name or alias is registered."""
        name_key = name.lower()
        return name_key in self._behaviors or name_key in self._aliases

    def get_behavior_info(self, name: str) -> Dict[str, Any]:
        """
        Get information about a registered behavior.

        Raises:
            RegistryError: If behavior not found
        """
        behavior_class = self.get_behavior_class(name)

        return {
            "name": behavior_class.name,
            "class": behavior_class.__name__,
            "module": behavior_class.__module__,
            "aliases": self.get_aliases_for_behavior(behavior_class.name),
            "parameters": dict(behavior_class.default_parameters),
        }


# Global registry instance - created once
_global_registry: Optional[BehaviorRegistry] = None


def get_registry() -> BehaviorRegistry:
    """Get the global behavior registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = BehaviorRegistry()
        _auto_register_behaviors()
    return _global_registry


def _auto_register_behaviors():
    """Register the behaviors shipped with ormgen."""
    from .behaviors.timestampable import TimestampableBehavior

    _global_registry.register(
        TimestampableBehavior.name, TimestampableBehavior, aliases=["timestamps"]
    )


# Public API functions using the global registry


def register_behavior(
    name: str,
    behavior_class: Type[Behavior],
    aliases: Optional[List[str]] = None,
):
    """Register a behavior in the global registry."""
    get_registry().register(name, behavior_class, aliases)


def create_behavior(name: str, parameters: Optional[Mapping[str, str]] = None) -> Behavior:
    """Create a behavior from the global registry."""
    return get_registry().create_behavior(name, parameters)


def list_behaviors() -> List[str]:
    """List all behaviors from the global registry."""
    return get_registry().list_behaviors()


def get_behavior_info(name: str) -> Dict[str, Any]:
    """Get information about a registered behavior."""
    return get_registry().get_behavior_info(name)
