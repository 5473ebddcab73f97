"""
Sheet Builder Domain Service

Turns a ReportRequest into the ordered list of logical Sheets.

Responsibility:
    - Single-sheet mode: one sheet with headers and rows copied verbatim
    - Partitioned mode: one sheet per distinct partition value
    - Validate row shapes and partition key before any external call

Architecture Notes:
    - Domain Service (pure, stateless, no I/O)
    - Safe to share between concurrent requests
    - Excel-specific title rules are NOT applied here (renderer concern)

Partitioning Rules:
    - Partition key resolves to the index of its first occurrence in headers
    - Rows are grouped by exact string equality of the cell at that index
    - None cells group under MISSING_PARTITION_VALUE ("")
    - Any other non-string cell raises InvalidPartitionKeyError
    - Sheets are ordered by ascending code-point order of the group key
    - Rows keep their input order inside each group
"""

import logging
from typing import Any, Sequence

from report_service.domain.report.constants import (
    DEFAULT_SHEET_TITLE,
    MISSING_PARTITION_VALUE,
)
from report_service.domain.report.value_objects.report_request import ReportRequest
from report_service.domain.report.value_objects.sheet import (
    DataRow,
    HeaderSpec,
    ReportData,
    Sheet,
)
from report_service.domain.shared.exceptions import (
    InvalidPartitionKeyError,
    RowShapeMismatchError,
)

logger = logging.getLogger(__name__)


class SheetBuilder:
    """
    Build logical sheets from a report request.

    Examples:
        >>> builder = SheetBuilder()
        >>> request = ReportRequest.partitioned_by(
        ...     "region",
        ...     headers=["region", "amount"],
        ...     rows=[["east", 10], ["west", 5], ["east", 3]],
        ... )
        >>> [sheet.title for sheet in builder.build_sheets(request)]
        ['east', 'west']
        >>> builder.build_sheets(request)[0].rows
        (('east', 10), ('east', 3))
    """

    def __init__(self, default_title: str = DEFAULT_SHEET_TITLE) -> None:
        self.default_title = default_title

    def build_report(self, file_id: str, request: ReportRequest) -> ReportData:
        """
        Build the complete logical workbook for one artifact.

        Args:
            file_id: Id allocated for the artifact
            request: Validated report request

        Returns:
            ReportData with the sheets from build_sheets()

        Raises:
            InvalidPartitionKeyError: See build_sheets()
            RowShapeMismatchError: See build_sheets()
        """
        return ReportData(
            file_id=file_id,
            title=request.description,
            submitter=request.submitter,
            sheets=tuple(self.build_sheets(request)),
        )

    def build_sheets(self, request: ReportRequest) -> list[Sheet]:
        """
        Build the ordered sheets for a request.

        Args:
            request: Report request (single-sheet or partitioned)

        Returns:
            One sheet (single-sheet mode) or one sheet per partition value

        Raises:
            RowShapeMismatchError: If any row length differs from header count
            InvalidPartitionKeyError: If the partition key is not a header,
                or a partition cell holds a non-string value
        """
        self._validate_row_shapes(request.headers, request.rows)
        headers = HeaderSpec.from_names(request.headers)

        if not request.partitioned:
            return [self._build_single_sheet(headers, request.rows)]

        return self._build_partitioned_sheets(
            headers, request.rows, request.partition_key, list(request.headers)
        )

    def _build_single_sheet(
        self, headers: tuple[HeaderSpec, ...], rows: Sequence[Sequence[Any]]
    ) -> Sheet:
        return Sheet(
            title=self.default_title,
            headers=headers,
            rows=tuple(tuple(row) for row in rows),
        )

    def _build_partitioned_sheets(
        self,
        headers: tuple[HeaderSpec, ...],
        rows: Sequence[Sequence[Any]],
        partition_key: str,
        header_names: list[str],
    ) -> list[Sheet]:
        key_index = self.resolve_partition_index(header_names, partition_key)

        groups: dict[str, list[DataRow]] = {}
        for row_index, row in enumerate(rows):
            group_key = self._partition_value(row[key_index], partition_key, row_index)
            groups.setdefault(group_key, []).append(tuple(row))

        # Output order is the sorted key order, never dict insertion order
        sheets = [
            Sheet(title=group_key, headers=headers, rows=tuple(groups[group_key]))
            for group_key in sorted(groups)
        ]

        logger.debug(
            f"Partitioned {len(rows)} rows by '{partition_key}' into {len(sheets)} sheets"
        )
        return sheets

    @staticmethod
    def resolve_partition_index(header_names: list[str], partition_key: str) -> int:
        """
        Resolve the partition key to its zero-based header index.

        Raises:
            InvalidPartitionKeyError: If partition_key is not in header_names

        Examples:
            >>> SheetBuilder.resolve_partition_index(["region", "amount"], "amount")
            1
        """
        try:
            return header_names.index(partition_key)
        except ValueError:
            raise InvalidPartitionKeyError(
                f"Partition key '{partition_key}' not found in headers",
                partition_key=partition_key,
                available_headers=header_names,
            )

    @staticmethod
    def _partition_value(value: Any, partition_key: str, row_index: int) -> str:
        if value is None:
            return MISSING_PARTITION_VALUE
        if not isinstance(value, str):
            raise InvalidPartitionKeyError(
                f"Row {row_index} has non-string value {value!r} "
                f"({type(value).__name__}) in partition column '{partition_key}'",
                partition_key=partition_key,
                row_index=row_index,
            )
        return value

    @staticmethod
    def _validate_row_shapes(
        headers: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> None:
        expected = len(headers)
        for row_index, row in enumerate(rows):
            if len(row) != expected:
                raise RowShapeMismatchError(
                    row_index=row_index, expected=expected, actual=len(row)
                )
