"""JSON transformer for session lists."""

import json
from typing import Any, Optional

from recurrence.models import SessionInstance
from .base import BaseTransformer


class JsonTransformer(BaseTransformer):
    """Transformer that converts sessions to the plain row shape as JSON."""
    
    def __init__(self, indent: int = 2) -> None:
        self._indent = indent
        self._rows: Optional[list[dict[str, Any]]] = None
    
    def transform(
        self,
        sessions: list[SessionInstance],
        calendar_name: str = "Schedule"
    ) -> list[dict[str, Any]]:
        """Convert sessions to a list of plain dictionaries.
        
        The calendar name is not part of the row shape and is ignored.
        """
        self._rows = [session.to_dict() for session in sessions]
        return self._rows
    
    def dumps(self) -> str:
        if self._rows is None:
            raise RuntimeError("No session data. Call transform() first.")
        return json.dumps(self._rows, indent=self._indent, ensure_ascii=False)
    
    def save(self, output_path: str) -> None:
        """Save the rows to a .json file.
        
        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        content = self.dumps()
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content + "\n")
