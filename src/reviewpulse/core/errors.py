"""Error taxonomy for ReviewPulse."""


class ReviewPulseError(Exception):
    """Base class for all ReviewPulse errors."""
    pass


class NotReadyError(ReviewPulseError):
    """Raised when an analysis is requested before the dataset and model are loaded."""
    pass


class EmptyDatasetError(ReviewPulseError):
    """Raised when sampling from an empty dataset."""
    pass


class DatasetLoadError(ReviewPulseError):
    """Raised when the review dataset cannot be loaded or has no usable rows."""
    pass


class ModelLoadError(ReviewPulseError):
    """Raised when the sentiment model cannot be initialised."""
    pass


class ClassificationError(ReviewPulseError):
    """Raised when the classifier fails or returns malformed output."""
    pass


class SinkDeliveryError(ReviewPulseError):
    """Raised when the logging webhook call fails. Never propagated past the loop."""
    pass
