from datetime import datetime, timezone


def utcnow():
    # Stored naive so SQLite and MySQL round-trip the same value.
    return datetime.now(timezone.utc).replace(tzinfo=None)
