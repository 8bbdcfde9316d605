from typing import Any, Callable, Dict, Iterable, List, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)

class DataLoadError(RuntimeError):
    """A content file could not be read or does not have the expected shape."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason

# ---------- Utilities ----------
def to_list(v):
    if v is None: return []
    return v if isinstance(v, list) else [v]

def unwrap_items(payload: Any) -> List[Any]:
    """Accept either a bare JSON list or a ``{"data": [...]}`` wrapper."""
    if isinstance(payload, dict) and "data" in payload:
        payload = payload["data"]
    return to_list(payload)

def parse_records(model: Type[M], items: Iterable[Any], source: str) -> Tuple[M, ...]:
    records = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise DataLoadError(source, f"record #{index} is not an object")
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            raise DataLoadError(source, f"record #{index} ({item.get('id', '?')}): {e}") from e
    return tuple(records)

def ensure_unique(records: Iterable[M], key: Callable[[M], Any], source: str, label: str) -> None:
    seen: Dict[Any, M] = {}
    for r in records:
        k = key(r)
        if k in seen:
            raise DataLoadError(source, f"duplicate {label} {k!r}")
        seen[k] = r
