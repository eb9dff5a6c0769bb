"""Quickstart: automatic dependency wiring from type hints.

Start with plain classes, resolve only the top-level service, and see how
wirebox builds the full dependency chain for you.
"""

from __future__ import annotations

from wirebox import Container


class Database:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    container = Container({"dsn": "sqlite:///app.db"})
    service = container.get(UserService)

    print(f"dsn={service.repository.database.dsn}")  # => dsn=sqlite:///app.db

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database
    print(f"same={container.get(UserService) is service}")  # => same=True


if __name__ == "__main__":
    main()
