"""JSON persistence for pydantic models: config.json and layout documents.

Reads turn pydantic/IO failures into ConfigurationError subclasses.
Writes go through a temp file that replaces the destination, and keep the
previous file as ``<name>.bak``. A file that exists but does not load is
never replaced by defaults.
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from pixelboard.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class PydanticPersistence:
    """Stateless load/save helpers (``AppConfig``, ``LayoutDocument``)."""

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Read ``path`` and validate it as ``model_type``.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the file is empty or not JSON
            ConfigValidationError: If the JSON holds invalid values
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        name = model_type.__name__
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFileInvalidError(str(path), f"Unreadable file: {e}") from e

        if not text.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            model = model_type.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"{path} is not a valid {name}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {name} from {path}")
        return model

    @staticmethod
    def save_json(
        data: BaseModel,
        path: Path,
        indent: int | None = 2,
        create_parents: bool = True,
        backup: bool = True,
    ) -> None:
        """
        Write ``data`` to ``path`` as JSON.

        Args:
            data: Model to write
            path: Destination file
            indent: JSON indentation, None for compact output
            create_parents: Create missing parent directories
            backup: Copy an existing destination to ``<name>.bak`` first

        Raises:
            OSError: If the file cannot be written
            ConfigurationError: If the model cannot be serialized
        """
        name = type(data).__name__
        try:
            text = data.model_dump_json(indent=indent)
        except Exception as e:
            raise ConfigurationError(
                user_message=f"Could not save {path}",
                technical_message=f"Serializing {name} failed: {e}",
                recovery_hint="Report this as a bug; the in-memory data is unchanged.",
            ) from e

        if create_parents:
            path.parent.mkdir(parents=True, exist_ok=True)

        if backup and path.exists():
            shutil.copy2(path, path.with_suffix(path.suffix + ".bak"))

        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(text, encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            logger.error(f"Could not write {name} to {path}: {e}")
            raise
        finally:
            temp_path.unlink(missing_ok=True)

        logger.debug(f"Saved {name} to {path}")

    @staticmethod
    def ensure_valid_or_create(
        path: Path,
        model_type: type[T],
        default_factory: Callable[[], T] | None = None,
        auto_save: bool = True,
    ) -> T:
        """
        Load ``path``, falling back to a default instance.

        A missing file is created from the default when ``auto_save`` is
        set. A broken file is logged and left on disk for the user to fix.
        """
        make_default = default_factory or model_type
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            instance = make_default()
            if auto_save:
                PydanticPersistence.save_json(instance, path, backup=False)
                logger.info(f"Created {path} with default {model_type.__name__}")
            return instance
        except ConfigurationError as e:
            logger.error(f"Could not load {path}: {e.user_message}")
            logger.warning(f"Using defaults for this session; {path} was left untouched")
            return make_default()
