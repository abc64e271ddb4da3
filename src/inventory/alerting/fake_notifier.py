"""Fake notifier: records notifications in memory for testing."""

from uuid import uuid4

from inventory.alerting.notifier_port import NotifierPort


class FakeNotifier(NotifierPort):
    """Notifier that records messages in memory for test assertions."""

    def __init__(self):
        self.sent: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"
        self.unreachable_actors: set[str] = set()

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Notification delivery failed",
        unreachable_actors=(),
    ):
        """Configure the fake adapter behavior for testing.

        ``unreachable_actors`` raise ConnectionError instead of returning a
        failed status, like a transport that is down.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.unreachable_actors = set(unreachable_actors)

    def send(self, actor_id: str, title: str, message: str, metadata: dict | None = None) -> dict:
        if actor_id in self.unreachable_actors:
            raise ConnectionError(f"Cannot reach notification service for actor {actor_id}")

        if not self.should_succeed:
            return {
                "notification_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        notification_id = f"ntf-{uuid4().hex[:12]}"
        self.sent.append(
            {
                "notification_id": notification_id,
                "actor_id": actor_id,
                "title": title,
                "message": message,
                "metadata": dict(metadata or {}),
            }
        )

        return {"notification_id": notification_id, "status": "sent"}

    def reset(self):
        """Clear sent notifications (useful between tests)."""
        self.sent.clear()
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"
        self.unreachable_actors = set()
