#!/usr/bin/env python3
"""
Demonstration of Wynn DI.

This demo shows:
1. Binding interfaces to implementations
2. Constant bindings
3. Field injection with Annotated[T, Inject]
4. Transient services created through Factory[T]
5. Initialization hooks
6. Validation before install
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Annotated

from wynn.di import (
    CircularDependencyError,
    Container,
    Factory,
    Initializable,
    Inject,
    ModuleDef,
)


class Database(ABC):
    """Abstract database interface."""

    @abstractmethod
    def query(self, sql: str) -> str:
        pass


@dataclass
class Config:
    """Application configuration."""

    app_name: str
    connection_string: str


class PostgresDB(Database, Initializable):
    """PostgreSQL implementation, connects once its config is injected."""

    config: Annotated[Config, Inject]

    def initialize(self) -> None:
        print(f"[DB] Connecting to {self.config.connection_string}")

    def query(self, sql: str) -> str:
        return f"PostgreSQL[{self.config.connection_string}]: {sql}"


class RequestHandler:
    """Handles one request; a new handler is created per request."""

    database: Annotated[Database, Inject]

    def handle(self, path: str) -> str:
        return self.database.query(f"SELECT * FROM pages WHERE path = '{path}'")


class WebServer:
    """Creates a handler for each incoming request."""

    config: Annotated[Config, Inject]
    handlers: Annotated[Factory[RequestHandler], Inject]

    def serve(self, path: str) -> str:
        handler = self.handlers.create()
        return f"[{self.config.app_name}] {handler.handle(path)}"


class InfrastructureModule(ModuleDef):
    def configure(self, container: Container) -> None:
        container.bind(Config).to_constant(
            Config("demo-app", "postgresql://localhost/demo")
        ).as_cached().on_install()
        container.bind(Database).to_new(PostgresDB).as_cached().on_install()


class WebModule(ModuleDef):
    def configure(self, container: Container) -> None:
        container.bind(RequestHandler).to_new().as_transient().on_request()
        container.bind(WebServer).to_new().as_cached().on_request()


def demo_basic() -> None:
    print("=== Basic resolution ===")
    container = Container.create(InfrastructureModule(), WebModule())
    container.validate()
    container.install()

    server = container.get(WebServer)
    print(server.serve("/"))
    print(server.serve("/about"))

    handlers = container.get(Factory[RequestHandler])
    print(f"Handlers are distinct: {handlers.create() is not handlers.create()}")
    print(f"Server is shared: {server is container.get(WebServer)}")


class Left:
    right: Annotated[Right, Inject]


class Right:
    left: Annotated[Left, Inject]


def demo_validation() -> None:
    print("\n=== Validation ===")
    container = Container.create()
    container.bind(Left).to_new().as_cached().on_request()
    container.bind(Right).to_new().as_cached().on_request()

    try:
        container.validate()
    except CircularDependencyError as e:
        print(f"Rejected: {e}")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    demo_basic()
    demo_validation()


if __name__ == "__main__":
    main()
