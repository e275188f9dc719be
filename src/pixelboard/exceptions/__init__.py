"""
Custom exception hierarchy for pixelboard.

This module defines application-specific exceptions that provide:
- Clear error categories (device, layout, configuration)
- User-friendly messages
- Context preservation
- Recovery hints

## Exception Hierarchy

```
PixelBoardError (base)
├── DeviceError
│   ├── DeviceNotFoundError
│   └── BackendCommandError
├── LayoutDocumentError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

### Example: Rejected Layout

```python
from pixelboard.exceptions import LayoutDocumentError

raise LayoutDocumentError("expected 528 values, got 12", source="/tmp/smiley.json")

# User sees: "Invalid LED layout: expected 528 values, got 12"
# Recovery hint: "Layout files are JSON arrays of 3 values (0-255) per LED..."
```

See `pixelboard.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import PixelBoardError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import (
    BackendCommandError,
    DeviceError,
    DeviceNotFoundError,
)
from .handlers import (
    ErrorCollector,
    collect_errors,
    format_error_for_display,
    handle_errors,
    wrap_backend_error,
    wrap_pydantic_error,
)
from .layout import LayoutDocumentError

__all__ = [
    "BackendCommandError",
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "DeviceError",
    "DeviceNotFoundError",
    "ErrorCollector",
    "LayoutDocumentError",
    "PixelBoardError",
    "collect_errors",
    "format_error_for_display",
    "handle_errors",
    "wrap_backend_error",
    "wrap_pydantic_error",
]
