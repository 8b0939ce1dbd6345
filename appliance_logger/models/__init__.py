"""Data models and domain objects."""

from .appliance_models import (
    Device,
    DeviceType,
    DescriptorKind,
    FieldDescriptor,
    RenderedField,
    SeriesPoint,
)

__all__ = [
    'Device',
    'DeviceType',
    'DescriptorKind',
    'FieldDescriptor',
    'RenderedField',
    'SeriesPoint',
]
