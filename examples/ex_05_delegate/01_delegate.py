"""Delegate: fall back to another container.

Identifiers a container cannot resolve through its own entries are looked up
in its delegate before autowiring is attempted.
"""

from __future__ import annotations

from wirebox import Container


def main() -> None:
    shared = Container({"dsn": "postgres://shared"})
    module = Container({"url": lambda dsn: f"{dsn}/orders"}, delegate=shared)

    print(f"url={module.get('url')}")  # => url=postgres://shared/orders
    print(f"has_dsn={module.has('dsn')}")  # => has_dsn=True
    print(f"local_entries={module.entries()}")  # => local_entries=['url']


if __name__ == "__main__":
    main()
