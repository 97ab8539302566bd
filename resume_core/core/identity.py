"""
Typed record identifiers.

Every raw identifier that crosses into the store goes through ``parse_key``,
which returns either a ``Key`` or a falsy ``InvalidKey``. It never raises, so
callers branch on the result instead of catching driver errors:

    key = parse_key(raw_id)
    if not key:
        return None
"""
import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Key:
    """Canonical identifier: 32 lowercase hex characters."""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InvalidKey:
    raw: object = field(default=None, compare=False)

    def __bool__(self) -> bool:
        return False


def parse_key(raw: object) -> Key | InvalidKey:
    if isinstance(raw, Key):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return InvalidKey(raw)
    try:
        parsed = uuid.UUID(raw.strip())
    except ValueError:
        return InvalidKey(raw)
    return Key(parsed.hex)


def new_key() -> Key:
    return Key(uuid.uuid4().hex)
