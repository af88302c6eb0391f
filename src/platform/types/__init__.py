from src.platform.types.uuid7_utils_types import UtilsUUID7, new_uuid7, to_uuid


__all__ = ['UtilsUUID7', 'new_uuid7', 'to_uuid']
