"""Fake actor resolver: an in-memory permission table for testing."""

from inventory.alerting.actor_port import ActorResolverPort


class FakeActorResolver(ActorResolverPort):
    """Resolves actors from permissions granted in memory."""

    def __init__(self):
        self.grants: dict[str, list[str]] = {}
        self.should_fail = False

    def grant(self, permission: str, *actor_ids: str):
        actors = self.grants.setdefault(permission, [])
        actors.extend(a for a in actor_ids if a not in actors)

    def configure(self, should_fail: bool = False):
        self.should_fail = should_fail

    def actors_with_permission(self, permission: str) -> list[str]:
        if self.should_fail:
            raise ConnectionError("Permission service unavailable")
        return list(self.grants.get(permission, []))

    def reset(self):
        self.grants.clear()
        self.should_fail = False
