"""
loopctl core - application infrastructure.

Provides:
- ServiceLocator / BaseSystem: service registry and async lifecycle
- ConfigManager: pydantic-validated configuration with persistence
- Signal: synchronous observer
- setup_logging: loguru sinks
- ApplicationBuilder: composition root
- commands: command execution engine with undo/redo

Usage:
    from loopctl.core import ApplicationBuilder
    from loopctl.core.commands import CommandBus

    locator = ApplicationBuilder("config.json").with_controller(context).build()
    await locator.start_all()
    await locator.get_system(CommandBus).dispatch({"command": "startLoop"})
"""
from .base_system import BaseSystem
from .locator import ServiceLocator
from .config import (
    ConfigManager,
    AppConfig,
    GeneralSettings,
    LoggingSettings,
    CommandSettings,
)
from .events import Signal
from .logging import setup_logging
from .bootstrap import ApplicationBuilder

__all__ = [
    # Core infrastructure
    "BaseSystem",
    "ServiceLocator",
    "ApplicationBuilder",

    # Configuration
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "LoggingSettings",
    "CommandSettings",

    # Events / logging
    "Signal",
    "setup_logging",
]
