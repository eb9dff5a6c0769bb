"""Immutability: derive containers without touching the original.

``with_entry`` and ``with_autowiring`` return copies that share no mutable
state with the receiver.
"""

from __future__ import annotations

from wirebox import Container


def main() -> None:
    base = Container({"env": "prod"})
    testing = base.with_entry("env", "test")

    print(f"base={base.get('env')}")  # => base=prod
    print(f"testing={testing.get('env')}")  # => testing=test

    strict = base.with_autowiring(False)
    print(f"autowire={base.autowire}/{strict.autowire}")  # => autowire=True/False
    print(f"entries={base.entries()}")  # => entries=['env']


if __name__ == "__main__":
    main()
