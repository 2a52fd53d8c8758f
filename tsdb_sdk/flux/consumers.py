"""
Receivers of the tables and records produced by the CSV parser.
"""

from typing import Callable, List

from .cancellable import Cancellable
from .domain import FluxRecord, FluxTable


class FluxResponseConsumer:
    """Base consumer; both callbacks are no-ops."""

    def accept_table(self, index: int, cancellable: Cancellable, table: FluxTable) -> None:
        pass

    def accept_record(self, index: int, cancellable: Cancellable, record: FluxRecord) -> None:
        pass


class FluxTableCollector(FluxResponseConsumer):
    """Collects the whole response in memory."""

    def __init__(self):
        self.tables: List[FluxTable] = []

    def accept_table(self, index: int, cancellable: Cancellable, table: FluxTable) -> None:
        self.tables.append(table)

    def accept_record(self, index: int, cancellable: Cancellable, record: FluxRecord) -> None:
        self.tables[index].records.append(record)


class FluxRecordCallback(FluxResponseConsumer):
    """Hands every record to ``on_next(cancellable, record)``."""

    def __init__(self, on_next: Callable[[Cancellable, FluxRecord], None]):
        self.on_next = on_next

    def accept_record(self, index: int, cancellable: Cancellable, record: FluxRecord) -> None:
        self.on_next(cancellable, record)
