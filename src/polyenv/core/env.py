from __future__ import annotations

import os
import threading
from typing import Dict, MutableMapping, Optional, Protocol, runtime_checkable

from polyenv.parsers.common import cut_null

# os.environ is not safe for concurrent mutation. Everything going through
# SystemEnv takes this lock; hosts running several loads concurrently hold it
# around a whole parse-and-apply run (it is re-entrant for that reason).
ENV_LOCK = threading.RLock()


@runtime_checkable
class GetEnv(Protocol):
    def get(self, key: str) -> Optional[str]: ...


@runtime_checkable
class Env(GetEnv, Protocol):
    """Variable sink: receives parsed pairs."""

    def set(self, key: str, value: str) -> None: ...


class SystemEnv:
    """The process environment (os.environ)."""

    def get(self, key: str) -> Optional[str]:
        with ENV_LOCK:
            return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        with ENV_LOCK:
            os.environ[key] = value

    def snapshot(self) -> Dict[str, str]:
        with ENV_LOCK:
            return dict(os.environ)


class MappingEnv:
    """A sink backed by a plain dict (or any mutable mapping)."""

    def __init__(self, data: Optional[MutableMapping[str, str]] = None) -> None:
        self.data: MutableMapping[str, str] = {} if data is None else data

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class EmptyEnv:
    def get(self, key: str) -> Optional[str]:
        return None


SYSTEM_ENV = SystemEnv()


def apply(env: Env, key: str, value: str, *, override: bool) -> bool:
    """
    Set key unless it already exists and override is off.

    Returns True if the sink was written.
    """
    key = cut_null(key)
    if not key:
        return False
    if not override and env.get(key) is not None:
        return False
    env.set(key, cut_null(value))
    return True
