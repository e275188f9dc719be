"""Model management helpers shared across pixelboard.

- **ObserverManager**: observer registration and failure-isolated notification
- **PydanticPersistence**: load/save Pydantic models to JSON with backups and atomic writes
"""

from pixelboard.model_manager.observer import ObserverManager
from pixelboard.model_manager.persistence import PydanticPersistence

__all__ = [
    "ObserverManager",
    "PydanticPersistence",
]
