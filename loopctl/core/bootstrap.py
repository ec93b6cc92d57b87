"""
Bootstrap helpers.

Assembles the configuration, logging, service locator and command bus
for an application that drives a controller.
"""
from typing import List, Optional, Type

from loguru import logger

from .base_system import BaseSystem
from .commands.bus import CommandBus
from .commands.types import ControllerContext
from .config import ConfigManager
from .locator import ServiceLocator
from .logging import setup_logging


class ApplicationBuilder:
    """
    Fluent builder for the command engine.

    Example:
        locator = (ApplicationBuilder("config.json")
                   .with_controller(OrchestratorContext(orchestrator))
                   .build())
        await locator.start_all()
        bus = locator.get_system(CommandBus)
    """

    def __init__(self, config_path: Optional[str] = "config.json"):
        """
        Args:
            config_path: Path to the JSON/TOML config file, None for in-memory defaults
        """
        self.config_path = config_path
        self._systems: List[Type[BaseSystem]] = []
        self._controller: Optional[ControllerContext] = None
        self._configure_logging = True

    def with_controller(self, controller: ControllerContext):
        self._controller = controller
        return self

    def with_logging(self, enable: bool = True):
        """Configure loguru sinks from config on build (on by default)."""
        self._configure_logging = enable
        return self

    def add_system(self, system_cls: Type[BaseSystem]):
        self._systems.append(system_cls)
        return self

    def build(self) -> ServiceLocator:
        config = ConfigManager(self.config_path)

        if self._configure_logging:
            setup_logging(config.data.general.debug_mode, config.data.logging)

        locator = ServiceLocator(config)
        bus = locator.register_system(CommandBus)
        if self._controller is not None:
            bus.bind_context(self._controller)

        for system_cls in self._systems:
            locator.register_system(system_cls)

        logger.info(f"Application built with {len(self._systems) + 1} systems")
        return locator
