# catalog_migration/models/spec_models.py

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

@dataclass
class ExtractedSpec:
    """
    Structured attributes pulled out of one product's HTML description.
    Every field is optional: None means the label was not found, which is
    different from an explicit value such as indoor=False.
    """
    # Common specs
    model_number: Optional[str] = None
    size: Optional[str] = None
    weight: Optional[float] = None
    warranty: Optional[str] = None
    # Inflatable specs
    pieces: Optional[int] = None
    blowers: Optional[int] = None
    operators: Optional[int] = None
    riders: Optional[str] = None
    indoor: Optional[bool] = None
    outdoor: Optional[bool] = None
    # Motor/Blower specs
    power: Optional[str] = None
    voltage: Optional[str] = None
    frequency: Optional[str] = None
    phase: Optional[str] = None
    rpm: Optional[int] = None
    amps: Optional[float] = None
    # Marketing sentence pulled from the same fragment
    clean_description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Only the fields that were actually found."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def is_empty(self) -> bool:
        return not self.to_dict()
