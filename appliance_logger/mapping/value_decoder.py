import logging
from typing import Any, Callable, List, Optional

from appliance_logger.models import DescriptorKind, FieldDescriptor, RenderedField

ReferenceLookup = Callable[[str, str], Optional[str]]


class ValueDecoder:
    """Classify decoded status fields by their declared descriptor kind.

    Lookups that miss (an enum code absent from the options table, a
    reference code with no name) produce a ``None`` label instead of an
    error, so one odd field never costs the whole snapshot.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def classify(self, field_key: str, raw_value: Any, descriptor: FieldDescriptor,
                 reference_name: Optional[ReferenceLookup] = None) -> RenderedField:
        code = str(raw_value)
        match descriptor.kind:
            case DescriptorKind.ENUM:
                return RenderedField(field_key, DescriptorKind.ENUM, raw_value,
                                     label=descriptor.options.get(code))
            case DescriptorKind.RANGE:
                return RenderedField(field_key, DescriptorKind.RANGE, raw_value,
                                     min=descriptor.min, max=descriptor.max)
            case DescriptorKind.REFERENCE:
                label = reference_name(field_key, code) if reference_name else None
                return RenderedField(field_key, DescriptorKind.REFERENCE, raw_value, label=label)
            case DescriptorKind.BITMASK:
                return RenderedField(field_key, DescriptorKind.BITMASK, raw_value,
                                     label=descriptor.options.get(code))
            case _:
                return RenderedField(field_key, DescriptorKind.UNKNOWN, raw_value)

    def decode(self, model, frame: Any) -> List[RenderedField]:
        """Decode one monitor frame with ``model`` and classify every field once.

        Raises MonitorDecodeError when the model rejects the frame.
        """
        record = model.decode_monitor(frame)
        fields = [
            self.classify(key, value, model.value(key), model.reference_name)
            for key, value in record.items()
        ]
        self.logger.debug("decoded %d fields", len(fields))
        return fields
