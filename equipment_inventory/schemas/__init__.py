from .common import ErrorResponse, OkResponse
from .equipment import EquipmentCreateRequest, EquipmentDTO, EquipmentUpdateRequest

__all__ = [
    "ErrorResponse",
    "OkResponse",
    "EquipmentCreateRequest",
    "EquipmentUpdateRequest",
    "EquipmentDTO",
]
