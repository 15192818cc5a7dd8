from dataclasses import fields
from enum import Enum
from typing import Any

import numpy as np


class BaseModel:
    def to_dict(self) -> dict[str, Any]:
        """Converts a dataclass instance to a dictionary, handling nested dataclasses,
        NamedTuples, enums and numpy arrays.
        """
        result = {}
        for f in fields(self):
            result[f.name] = self._convert_value(getattr(self, f.name))
        return result

    def _convert_value(self, value: Any) -> Any:
        if hasattr(value, "to_dict"):
            return value.to_dict()
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, tuple) and hasattr(value, "_asdict"):  # Handle NamedTuple
            return {k: self._convert_value(v) for k, v in value._asdict().items()}
        if isinstance(value, np.ndarray):
            return value.tolist()
        if isinstance(value, np.generic):
            return value.item()
        if isinstance(value, (list, tuple)):
            return [self._convert_value(v) for v in value]
        return value
