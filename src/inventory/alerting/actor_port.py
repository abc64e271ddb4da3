"""Actor resolution port: who is allowed to see an alert."""

from abc import ABC, abstractmethod


class ActorResolverPort(ABC):
    """Abstract interface for permission-based actor lookup."""

    @abstractmethod
    def actors_with_permission(self, permission: str) -> list[str]:
        """Return the ids of active actors holding ``permission``."""
        ...
