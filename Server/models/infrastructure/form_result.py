"""
Watchpost Server - Form Result Model

Outcome of submitting a form workflow.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class FormResult:
    """
    Result of a Submit() call

    success is True only when the submitted data was valid and persisted.
    A failed result without errors means writing to the store failed.
    """
    success: bool
    errors: List[str] = field(default_factory=list)
    payload: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def Failed(cls, *errors: str, **payload) -> "FormResult":
        return cls(success=False, errors=list(errors), payload=payload)
