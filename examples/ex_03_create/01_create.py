"""Create: fresh instances with per-call overrides.

``create`` never caches the instance it returns, but it reuses the cached
binding plan and any cached dependencies.
"""

from __future__ import annotations

from wirebox import Container


class Clock:
    pass


class Job:
    def __init__(self, clock: Clock, name: str, retries: int = 3) -> None:
        self.clock = clock
        self.name = name
        self.retries = retries


def main() -> None:
    container = Container()

    first = container.create(Job, {"name": "cleanup"})
    second = container.create(Job, {"name": "backup", "retries": 5})

    print(f"first={first.name}/{first.retries}")  # => first=cleanup/3
    print(f"second={second.name}/{second.retries}")  # => second=backup/5
    print(f"distinct={first is not second}")  # => distinct=True
    print(f"shared_clock={first.clock is second.clock}")  # => shared_clock=True


if __name__ == "__main__":
    main()
