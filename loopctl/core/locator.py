from typing import Type, TypeVar, Dict, List
from loguru import logger

from .config import ConfigManager
from .base_system import BaseSystem

T = TypeVar('T', bound=BaseSystem)

class ServiceLocator:
    """
    Registry for application services (Systems).
    Manages initialization and shutdown order.

    One locator is created per application by the composition root
    (see ApplicationBuilder) and passed to every system it builds.
    """

    def __init__(self, config: ConfigManager):
        self.config = config
        self._systems: Dict[Type[BaseSystem], BaseSystem] = {}
        logger.debug("ServiceLocator created.")

    def register_system(self, system_cls: Type[T]) -> T:
        """
        Instantiates and registers a system.
        """
        if system_cls in self._systems:
            return self._systems[system_cls]

        logger.debug(f"Registering system: {system_cls.__name__}")
        instance = system_cls(self, self.config)
        self._systems[system_cls] = instance
        return instance

    def get_system(self, system_cls: Type[T]) -> T:
        """
        Retrieves a registered system.
        """
        if system_cls not in self._systems:
            raise KeyError(f"System {system_cls.__name__} not registered.")
        return self._systems[system_cls]

    async def start_all(self):
        """
        Initialize all registered systems in dependency order.

        Systems can declare dependencies using `depends_on` class attribute:
            class MyService(BaseSystem):
                depends_on = [CommandBus]
        """
        logger.info("Starting all systems...")

        for system in self._topological_sort():
            try:
                await system.initialize()
                logger.info(f"System {system.__class__.__name__} started.")
            except Exception as e:
                logger.error(f"Failed to start system {system.__class__.__name__}: {e}")

    def _topological_sort(self) -> List[BaseSystem]:
        """
        Sort systems by dependencies (topological order).

        Returns:
            List of systems in safe start order
        """
        in_degree = {sys: 0 for sys in self._systems.values()}
        graph = {sys: [] for sys in self._systems.values()}

        for sys in self._systems.values():
            for dep_cls in getattr(sys.__class__, 'depends_on', []):
                if dep_cls in self._systems:
                    graph[self._systems[dep_cls]].append(sys)
                    in_degree[sys] += 1

        # Kahn's algorithm
        queue = [sys for sys, deg in in_degree.items() if deg == 0]
        result = []

        while queue:
            sys = queue.pop(0)
            result.append(sys)

            for dependent in graph[sys]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    queue.append(dependent)

        if len(result) != len(self._systems):
            logger.warning("Circular dependency detected, using registration order")
            return list(self._systems.values())

        return result

    async def stop_all(self):
        """
        Shutdown all systems in reverse start order.
        """
        logger.info("Stopping all systems...")
        for system in reversed(self._topological_sort()):
            try:
                await system.shutdown()
                logger.info(f"System {system.__class__.__name__} stopped.")
            except Exception as e:
                logger.error(f"Failed to stop system {system.__class__.__name__}: {e}")
