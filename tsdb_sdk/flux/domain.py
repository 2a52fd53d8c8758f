"""
Result model of a Flux query: tables made of typed columns and records.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class FluxColumn:
    """Column definition taken from the CSV annotations and header row."""
    index: int
    label: Optional[str] = None
    data_type: Optional[str] = None
    group: bool = False
    default_value: Optional[str] = None


@dataclass
class FluxRecord:
    """One row of a table, values keyed by column label."""
    table: int
    values: Dict[str, Any] = field(default_factory=dict)

    def get_start(self) -> Optional[datetime]:
        """Inclusive lower time bound of all records."""
        return self.values.get('_start')

    def get_stop(self) -> Optional[datetime]:
        """Exclusive upper time bound of all records."""
        return self.values.get('_stop')

    def get_time(self) -> Optional[datetime]:
        return self.values.get('_time')

    def get_value(self) -> Any:
        return self.values.get('_value')

    def get_field(self) -> Optional[str]:
        return self.values.get('_field')

    def get_measurement(self) -> Optional[str]:
        return self.values.get('_measurement')

    def __getitem__(self, key: str) -> Any:
        return self.values[key]


@dataclass
class FluxTable:
    columns: List[FluxColumn] = field(default_factory=list)
    records: List[FluxRecord] = field(default_factory=list)

    def get_group_key(self) -> List[FluxColumn]:
        """Columns whose value is shared by every record of the table."""
        return [column for column in self.columns if column.group]
