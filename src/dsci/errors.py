class DatasetCIError(RuntimeError):
    """Base class for fatal errors that abort a run without a report."""


class MissingDirectoryError(DatasetCIError):
    """Raised when the image or label root does not exist."""


class NoImagesError(DatasetCIError):
    """Raised when the image root holds no supported image files."""


class ManifestError(DatasetCIError):
    """Raised when a dataset manifest is missing or malformed."""


class RunArtifactError(DatasetCIError):
    """Raised when a training run did not leave the expected artifacts."""


class ConfigError(DatasetCIError):
    """Raised when configuration values cannot be used."""
