"""Error taxonomy for the narration pipeline.

Every error knows the stage it came from, and chunk-level errors carry the
zero-based chunk index so the CLI can say which chunk broke.
"""


class NarratorError(Exception):
    """Base class for all pipeline failures."""

    stage = "pipeline"

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.message = message
        self.index = index

    def __str__(self) -> str:
        if self.index is not None:
            return f"chunk {self.index + 1}: {self.message}"
        return self.message


class ConfigError(NarratorError):
    stage = "configuration"


class InputError(NarratorError):
    stage = "reading input"


class ChunkingError(NarratorError):
    stage = "chunking"


class SynthesisError(NarratorError):
    """Remote TTS call failed: HTTP error, auth, timeout, or stream write."""

    stage = "synthesis"

    def __init__(
        self,
        message: str,
        index: int | None = None,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        super().__init__(message, index=index)
        self.status_code = status_code
        self.detail = detail


class PostProcessError(NarratorError):
    stage = "tempo adjustment"


class MergeError(NarratorError):
    stage = "merge"


class CleanupError(NarratorError):
    """Non-fatal: an intermediate file could not be removed after a merge."""

    stage = "cleanup"
