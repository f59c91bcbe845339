from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(slots=True)
class ValidationResult:
    """
    Outcome of a time-field rule.

    - ok: False when the form must not accept the value.
    - field_errors: field name -> message (one per field).
    """
    ok: bool = True
    field_errors: Dict[str, str] = field(default_factory=dict)

    def add_field_error(self, field_name: str, message: str) -> None:
        if field_name and message:
            self.field_errors[field_name] = message
            self.ok = False

    def messages(self) -> List[str]:
        return list(self.field_errors.values())


from .time_rules import validate_time_value
