from .store import RecordStore, records_from_json, records_to_json  # noqa

__all__ = ["RecordStore", "records_from_json", "records_to_json"]
