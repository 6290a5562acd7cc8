"""Error kinds raised by the map rendering pipeline."""

from __future__ import annotations


class IntensityMapError(Exception):
    """Base class for every failure surfaced to a render caller."""

    kind = "internal"

    @property
    def is_client_error(self) -> bool:
        return False


class InputValidationError(IntensityMapError, ValueError):
    """Intensity payload is missing, unparseable, or out of range."""

    kind = "input_validation"

    @property
    def is_client_error(self) -> bool:
        return True


class DatasetError(IntensityMapError):
    """Geometry dataset is missing, unreadable, or malformed."""

    kind = "dataset"


class GeometryShapeError(IntensityMapError):
    """Feature has no usable `id` or an unsupported geometry."""

    kind = "geometry_shape"


class RenderingError(IntensityMapError, RuntimeError):
    """Scene rasterization, text drawing, or encoding failed."""

    kind = "rendering"
