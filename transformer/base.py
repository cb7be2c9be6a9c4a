"""Abstract base class for session list transformers."""

from abc import ABC, abstractmethod
from typing import Any

from recurrence.models import SessionInstance


class BaseTransformer(ABC):
    """Abstract base class defining the interface for session transformers.
    
    Extend this class to implement transformers for different output formats
    (e.g., iCalendar, JSON, CSV, etc.).
    """
    
    @abstractmethod
    def transform(
        self,
        sessions: list[SessionInstance],
        calendar_name: str = "Schedule"
    ) -> Any:
        """Transform sessions into the target format.
        
        Args:
            sessions: Ordered list of sessions to transform.
            calendar_name: Display name of the exported schedule.
            
        Returns:
            Transformed data in the target format.
        """
        pass
    
    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.
        
        Args:
            output_path: Path to the output file.
        """
        pass
