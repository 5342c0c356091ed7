# Snake - Dark Mode
# Snake on a square grid with fruit power-ups and a mouse that runs from you.

from snakedark.config import GameConfig
from snakedark.engine import Frame, GameOverReport, Phase, SimulationEngine
from snakedark.storage import JsonFileStore, MemoryStore, StorageService

__version__ = "1.0.0"

__all__ = [
    "Frame",
    "GameConfig",
    "GameOverReport",
    "JsonFileStore",
    "MemoryStore",
    "Phase",
    "SimulationEngine",
    "StorageService",
]
