import time
from typing import Callable, List, Optional

from sqlalchemy import create_engine, text


class FakeSession:
    def __init__(self, fail_on_commit: Optional[Exception] = None):
        self.added: List[object] = []
        self.committed = False
        self.fail_on_commit = fail_on_commit
        self._next_id = 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    def add(self, obj):
        self.added.append(obj)

    async def commit(self):
        if self.fail_on_commit is not None:
            raise self.fail_on_commit
        self.committed = True

    async def refresh(self, obj, *args, **kwargs):
        # emulate DB assigning an id on insert
        if not getattr(obj, "id", None):
            obj.id = self._next_id
            self._next_id += 1


class FakeSessionmaker:
    def __init__(self, fail_on_commit: Optional[Exception] = None):
        self.sessions: List[FakeSession] = []
        self.fail_on_commit = fail_on_commit

    def __call__(self):
        sess = FakeSession(fail_on_commit=self.fail_on_commit)
        self.sessions.append(sess)
        return sess


class RecordingDispatcher:
    """Stands in for EventDispatcher in handler tests."""

    def __init__(self):
        self.published: List[tuple] = []

    def publish(self, event_name, *payload):
        self.published.append((event_name, *payload))
        return True

    async def drain(self):
        return None


def sqlite_urls(tmp_path):
    db_file = tmp_path / "notifications.db"
    return f"sqlite+aiosqlite:///{db_file}", f"sqlite:///{db_file}"


def fetch_rows(sync_url: str):
    engine = create_engine(sync_url)
    try:
        with engine.connect() as conn:
            return conn.execute(
                text('SELECT id, message, type, "createdAt" FROM notifications ORDER BY id')
            ).all()
    finally:
        engine.dispose()


def wait_for(predicate: Callable[[], bool], timeout: float = 5.0, interval: float = 0.05) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()
