"""Base class for component detectors."""

from abc import ABC, abstractmethod
from typing import List

from ..models import ComponentCandidate, Element
from ..stores.registry import TreeRegistry


class Detector(ABC):
    """Contract for detectors that propose component candidates for a tree."""

    @abstractmethod
    def detect(self, body: Element, registry: TreeRegistry) -> List[ComponentCandidate]:
        """Return candidates ordered the way they must be extracted."""
