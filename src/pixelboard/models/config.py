"""Application configuration model."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_serializer, field_validator

from pixelboard.model_manager.persistence import PydanticPersistence

from .color import Color
from .matrix import MATRIX_HEIGHT, MATRIX_WIDTH

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".pixelboard" / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Paths
    layouts_dir: Path = Field(
        default_factory=lambda: Path.home() / ".pixelboard" / "layouts",
        description="Default directory offered for saving and loading layouts",
    )

    # Polling
    poll_interval: float = Field(
        default=1.0,
        gt=0,
        description="How often to check device connections and temperatures (seconds)",
    )

    # Matrix geometry (fixed for this board family, configurable for other panels)
    matrix_width: int = Field(default=MATRIX_WIDTH, ge=1, description="LED columns per board")
    matrix_height: int = Field(default=MATRIX_HEIGHT, ge=1, description="LED rows per board")

    # Painting
    default_color: str = Field(
        default="#FFFFFF", description="Initial color-picker value for new device windows"
    )

    # Sensors
    sensor_count: int = Field(
        default=4, ge=0, description="Number of temperature sensors shown per board"
    )

    @field_validator("default_color")
    @classmethod
    def validate_default_color(cls, v: str) -> str:
        """Ensure the default color is a hex color string."""
        return Color.from_hex(v).to_hex()

    @field_serializer("layouts_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    @property
    def picker_default(self) -> Color:
        """Default color-picker value as a Color."""
        return Color.from_hex(self.default_color)

    def ensure_directories(self) -> None:
        """Create config directories if they don't exist."""
        self.layouts_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        A missing file is created with defaults. A corrupted file is left
        untouched and defaults are used for this session.

        Args:
            path: Path to config file. If None, uses ~/.pixelboard/config.json.
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        config = PydanticPersistence.ensure_valid_or_create(path, cls)
        config.ensure_directories()
        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        PydanticPersistence.save_json(self, path)
        logger.info(f"Saved configuration to {path}")
