"""
Sheet Model Value Objects

Logical (engine-independent) description of a spreadsheet report:
headers, sheets and the workbook handed to the renderer.

Responsibility:
    - HeaderSpec: column name + display order
    - Sheet: title + shared headers + ordered rows
    - ReportData: everything the renderer needs for one artifact

Architecture Notes:
    - Value Objects (immutable frozen dataclasses, no behavior beyond validation)
    - Rows are stored as tuples so a built Sheet cannot be mutated
    - Produced by SheetBuilder, consumed by the rendering engine
"""

from dataclasses import dataclass, field
from typing import Any, Sequence

# One data row: cell values positionally aligned to the sheet headers
DataRow = tuple[Any, ...]


@dataclass(frozen=True)
class HeaderSpec:
    """
    Column header with its zero-based display order.

    Examples:
        >>> HeaderSpec(name="region", order=0)
        HeaderSpec(name='region', order=0)
    """

    name: str
    order: int

    def __post_init__(self) -> None:
        """Business Rule: display order is a non-negative position."""
        if self.order < 0:
            raise ValueError(f"Header order must be >= 0, got {self.order}")

    @classmethod
    def from_names(cls, names: Sequence[str]) -> tuple["HeaderSpec", ...]:
        """
        Derive header specs 1:1 from a list of column names.

        Args:
            names: Column names in display order

        Returns:
            Tuple of HeaderSpec, order equal to list position

        Examples:
            >>> HeaderSpec.from_names(["region", "amount"])
            (HeaderSpec(name='region', order=0), HeaderSpec(name='amount', order=1))
        """
        return tuple(cls(name=name, order=index) for index, name in enumerate(names))


@dataclass(frozen=True)
class Sheet:
    """
    One worksheet of a report.

    Attributes:
        title: Logical sheet title (default title or partition group key)
        headers: Ordered headers, identical for every sheet of one request
        rows: Ordered data rows, each with len(headers) values

    Business Rules:
        - Every row has exactly one value per header (checked here as well
          as in SheetBuilder, so hand-built sheets are also consistent)
        - Title is kept verbatim; Excel title restrictions are the renderer's concern
    """

    title: str
    headers: tuple[HeaderSpec, ...]
    rows: tuple[DataRow, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        width = len(self.headers)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Sheet '{self.title}': row {index} has {len(row)} values, "
                    f"expected {width}"
                )

    @property
    def header_names(self) -> list[str]:
        """Column names in display order."""
        return [header.name for header in sorted(self.headers, key=lambda h: h.order)]

    @property
    def row_count(self) -> int:
        """Number of data rows (header row excluded)."""
        return len(self.rows)


@dataclass(frozen=True)
class ReportData:
    """
    Complete logical workbook for one artifact.

    Attributes:
        file_id: Id allocated for the artifact
        title: Report title (request description)
        submitter: Identity of the requester
        sheets: Ordered sheets (one or more; zero for an empty partitioned request)
    """

    file_id: str
    title: str
    submitter: str
    sheets: tuple[Sheet, ...] = field(default_factory=tuple)

    @property
    def sheet_titles(self) -> list[str]:
        return [sheet.title for sheet in self.sheets]
