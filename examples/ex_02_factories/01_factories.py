"""Factories: compute entries lazily from other entries.

Factory parameters are bound like constructor parameters: by declared class,
then by name, then by default value. A factory runs once; ``get`` caches its
result.
"""

from __future__ import annotations

from wirebox import Container, Value


class Settings:
    def __init__(self, debug: bool = False) -> None:
        self.debug = debug


def build_label(settings: Settings, name: str) -> str:
    return f"{name} (debug={settings.debug})"


def shout(text: str) -> str:
    return text.upper()


def main() -> None:
    container = Container(
        {
            "count": 5,
            "double": lambda count: count * 2,
            "name": "inventory",
            "label": build_label,
            "formatter": Value(shout),
            Settings: lambda: Settings(debug=True),
        },
    )

    print(f"double={container.get('double')}")  # => double=10
    print(f"label={container.get('label')}")  # => label=inventory (debug=True)
    print(f"formatted={container.get('formatter')('ok')}")  # => formatted=OK
    print(f"entries={len(container.entries())}")  # => entries=6


if __name__ == "__main__":
    main()
