"""
Streaming parser of the annotated CSV returned by the query endpoint.

A response holds one or more tables. Each table starts with the
``#datatype``, ``#group`` and ``#default`` annotation rows followed by a header
row with the column labels:

    #datatype,string,long,dateTime:RFC3339,double,string
    #group,false,false,false,false,true
    #default,_result,,,,
    ,result,table,_time,_value,_field
    ,,0,2019-01-01T00:00:00Z,10.5,usage

Consecutive data rows sharing the annotations but carrying a different
``table`` value belong to a new table with the same columns. A failure inside
the query is reported as a table with ``error`` and ``reference`` columns.
"""

import base64
import csv
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Optional

from tsdb_sdk.exceptions import FluxCsvParserException, FluxQueryException

from .cancellable import Cancellable
from .consumers import FluxResponseConsumer
from .domain import FluxColumn, FluxRecord, FluxTable

logger = logging.getLogger(__name__)

_RFC3339 = re.compile(
    r'(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})'
)


class FluxCsvParser:
    """
    Parse the CSV ``lines`` and push tables and records into ``consumer``.

    Parsing stops at the next row once ``cancellable`` is cancelled.
    """

    def __init__(self, lines: Iterable[str], consumer: FluxResponseConsumer,
                 cancellable: Optional[Cancellable] = None):
        self.lines = lines
        self.consumer = consumer
        self.cancellable = cancellable or Cancellable()

    def parse(self) -> None:
        table: Optional[FluxTable] = None
        table_index = 0
        table_id = -1
        start_new_table = False
        in_error = False

        for row in csv.reader(self.lines):
            if self.cancellable.is_cancelled():
                logger.debug("Query cancelled, stop parsing")
                return

            if not row or (len(row) == 1 and not row[0]):
                continue

            token = row[0]

            if token == '#datatype':
                start_new_table = True
                in_error = False
                table = FluxTable()
                if not self._deliver(self.consumer.accept_table, table_index, table):
                    return
                table_index += 1
                table_id = -1
            elif table is None:
                raise FluxCsvParserException(
                    "Unable to parse CSV response. FluxTable definition was not found.", row)

            if token == '#datatype':
                _add_data_types(table, row)
            elif token == '#group':
                _add_groups(table, row)
            elif token == '#default':
                _add_default_values(table, row)
            elif start_new_table:
                _add_column_labels(table, row)
                in_error = len(row) >= 3 and row[1] == 'error' and row[2] == 'reference'
                start_new_table = False
            elif in_error:
                raise _query_error(row)
            else:
                current_id = _table_id(table, row)
                if table_id == -1:
                    table_id = current_id

                if table_id != current_id:
                    # Same annotations, next table
                    table = FluxTable(columns=list(table.columns))
                    if not self._deliver(self.consumer.accept_table, table_index, table):
                        return
                    table_index += 1
                    table_id = current_id

                record = parse_record(table_index - 1, table, row)
                if not self._deliver(self.consumer.accept_record, table_index - 1, record):
                    return

    def _deliver(self, accept, index: int, value) -> bool:
        if not self.cancellable.run_if_active(accept, index, self.cancellable, value):
            logger.debug("Query cancelled, stop parsing")
            return False
        return True


def parse_record(table_index: int, table: FluxTable, row: List[str]) -> FluxRecord:
    record = FluxRecord(table=table_index)

    for column in table.columns:
        if column.index >= len(row):
            raise FluxCsvParserException(
                f"Row has {len(row)} values but column '{column.label}' is at position {column.index}", row)
        record.values[column.label] = to_value(row[column.index], column)

    return record


def to_value(value: str, column: FluxColumn) -> Any:
    """Convert a CSV cell to the Python type named by the column's data type."""
    if value == '':
        if not column.default_value:
            return None
        value = column.default_value

    data_type = column.data_type

    try:
        if data_type == 'boolean':
            return value == 'true'
        if data_type in ('long', 'unsignedLong', 'duration'):
            return int(value)
        if data_type == 'double':
            return float(value)
        if data_type == 'base64Binary':
            return base64.b64decode(value)
        if data_type in ('dateTime:RFC3339', 'dateTime:RFC3339Nano'):
            return parse_rfc3339(value)
    except ValueError as e:
        raise FluxCsvParserException(
            f"Unable to parse '{value}' of column '{column.label}' as {data_type}: {e}") from e

    return value


def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC3339 timestamp into an aware UTC datetime.

    Fractional seconds beyond microseconds are truncated.
    """
    match = _RFC3339.fullmatch(value)
    if match is None:
        raise ValueError(f"not an RFC3339 timestamp: {value}")

    year, month, day, hour, minute, second, fraction, offset = match.groups()
    microsecond = int((fraction or '0')[:6].ljust(6, '0'))

    if offset in ('Z', 'z'):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == '-' else 1
        tz = timezone(sign * timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6])))

    parsed = datetime(int(year), int(month), int(day), int(hour), int(minute), int(second),
                      microsecond, tzinfo=tz)
    return parsed.astimezone(timezone.utc)


def _add_data_types(table: FluxTable, row: List[str]) -> None:
    for index in range(1, len(row)):
        table.columns.append(FluxColumn(index=index, data_type=row[index]))


def _add_groups(table: FluxTable, row: List[str]) -> None:
    for index in range(1, len(row)):
        _column(table, index, row).group = row[index] == 'true'


def _add_default_values(table: FluxTable, row: List[str]) -> None:
    for index in range(1, len(row)):
        _column(table, index, row).default_value = row[index] or None


def _add_column_labels(table: FluxTable, row: List[str]) -> None:
    for index in range(1, len(row)):
        _column(table, index, row).label = row[index]


def _column(table: FluxTable, index: int, row: List[str]) -> FluxColumn:
    if index > len(table.columns):
        raise FluxCsvParserException(
            f"Annotation row has more values than the #datatype row ({len(table.columns)} columns)", row)
    return table.columns[index - 1]


def _table_id(table: FluxTable, row: List[str]) -> int:
    position = next((column.index for column in table.columns if column.label == 'table'), 2)
    try:
        return int(row[position])
    except (IndexError, ValueError) as e:
        raise FluxCsvParserException("Unable to read the table ID of a data row", row) from e


def _query_error(row: List[str]) -> FluxQueryException:
    message = row[1] if len(row) > 1 and row[1] else "Unknown query error"
    reference = None
    if len(row) > 2 and row[2]:
        try:
            reference = int(row[2])
        except ValueError:
            logger.debug(f"Ignoring non numeric error reference '{row[2]}'")
    return FluxQueryException(message, reference)
