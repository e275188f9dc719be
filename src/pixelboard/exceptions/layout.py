"""Layout document exceptions."""

from .base import PixelBoardError


class LayoutDocumentError(PixelBoardError):
    """A layout document does not describe a full matrix."""

    def __init__(self, reason: str, source: str | None = None):
        """
        Initialize layout document error.

        Args:
            reason: Why the document was rejected
            source: Path the document came from (optional)
        """
        user_msg = f"Invalid LED layout: {reason}"
        recovery = "Layout files are JSON arrays of 3 values (0-255) per LED."
        if source:
            recovery += f"\nFile: {source}"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Rejected layout document from {source or 'backend'}: {reason}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.reason = reason
        self.source = source
