"""
Post-construction hook for container-managed objects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Initializable(ABC):
    """
    Objects that need to run code once their fields are injected.

    The container calls initialize() exactly once per constructed instance,
    after every injectable field is set and before the instance is stored or
    handed out.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Called after dependency injection has completed."""


def run_initialize(obj: object) -> None:
    if isinstance(obj, Initializable):
        obj.initialize()
