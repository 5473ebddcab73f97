"""
Excel Writer Service

Renders the logical report model into .xlsx bytes using openpyxl.

Responsibility:
    - One worksheet per logical Sheet, in the given order
    - Bold, filled header row
    - Auto-size columns for readability
    - Apply Excel sheet title rules (length, forbidden characters, uniqueness)
    - Drop control characters XML worksheets cannot hold from every string
    - Derive the display file name from the report title

Architecture Notes:
    - Infrastructure Layer (depends on openpyxl library)
    - Blocking, CPU-bound; the orchestrator calls it in a worker thread
    - Never touches storage: returns bytes, the caller decides where they go
"""

import logging
import re
from io import BytesIO
from typing import Any

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from report_service.application.ports.renderer import RenderedWorkbook
from report_service.domain.report.constants import ARTIFACT_EXTENSION
from report_service.domain.report.value_objects.sheet import ReportData, Sheet

logger = logging.getLogger(__name__)


class ExcelWriterService:
    """
    Service rendering ReportData into an .xlsx workbook.

    Output Workbook Structure:
        - Sheet order equals ReportData.sheets order
        - Row 1: header names (bold, light grey fill)
        - Rows 2..n+1: data rows, values written as-is except strings,
          which lose control characters other than tab, LF and CR
        - Zero sheets: a single empty worksheet (a workbook needs one)

    Examples:
        >>> writer = ExcelWriterService()
        >>> rendered = writer.render(report_data)
        >>> rendered.file_name
        'Sales by region.xlsx'
        >>> len(rendered.content) > 0
        True
    """

    HEADER_FILL_COLOR = "D9D9D9"

    # Excel limits for worksheet titles
    MAX_TITLE_LENGTH = 31
    FORBIDDEN_TITLE_CHARS = re.compile(r"[\[\]:*?/\\]")
    EMPTY_TITLE_FALLBACK = "(empty)"

    # Characters not allowed in a download file name
    FORBIDDEN_FILE_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
    MAX_FILE_NAME_STEM = 100

    MIN_COLUMN_WIDTH = 8
    MAX_COLUMN_WIDTH = 60

    def __init__(self) -> None:
        self._header_font = Font(bold=True)
        self._header_fill = PatternFill(
            start_color=self.HEADER_FILL_COLOR,
            end_color=self.HEADER_FILL_COLOR,
            fill_type="solid",
        )

    def render(self, report: ReportData) -> RenderedWorkbook:
        """
        Render a report into .xlsx bytes.

        Process Flow:
            1. Create workbook (drop default sheet unless there are no sheets)
            2. For each Sheet: create worksheet with a safe unique title
            3. Write header row and data rows
            4. Auto-size columns
            5. Save to in-memory buffer

        Args:
            report: Logical workbook built by SheetBuilder

        Returns:
            RenderedWorkbook with bytes and display file name

        Raises:
            Exception: Any openpyxl error (e.g. unsupported cell value);
                the orchestrator maps it to ArtifactGenerationFailedError
        """
        workbook = Workbook()

        if report.sheets:
            workbook.remove(workbook.active)
        else:
            workbook.active.title = self.EMPTY_TITLE_FALLBACK

        used_titles: set[str] = set()
        for sheet in report.sheets:
            title = self.safe_sheet_title(sheet.title, used_titles)
            used_titles.add(title.lower())
            worksheet = workbook.create_sheet(title=title)
            self._write_sheet(worksheet, sheet)

        buffer = BytesIO()
        workbook.save(buffer)
        content = buffer.getvalue()

        file_name = self.build_file_name(report.title, report.file_id)
        logger.debug(
            f"Rendered {report.file_id}: {len(report.sheets)} sheets, "
            f"{len(content)} bytes"
        )
        return RenderedWorkbook(content=content, file_name=file_name)

    def _write_sheet(self, worksheet: Worksheet, sheet: Sheet) -> None:
        worksheet.append([self.clean_value(name) for name in sheet.header_names])
        for cell in worksheet[1]:
            cell.font = self._header_font
            cell.fill = self._header_fill

        for row in sheet.rows:
            worksheet.append([self.clean_value(value) for value in row])

        self._autosize_columns(worksheet, len(sheet.headers))

    def _autosize_columns(self, worksheet: Worksheet, column_count: int) -> None:
        """
        Auto-size columns based on content width.

        Width = longest cell text + 2, clamped to
        [MIN_COLUMN_WIDTH, MAX_COLUMN_WIDTH].
        """
        for column_index in range(1, column_count + 1):
            column_letter = get_column_letter(column_index)

            max_width = 0
            for cell in worksheet[column_letter]:
                if cell.value is None:
                    continue
                max_width = max(max_width, len(str(cell.value)))

            adjusted_width = min(
                max(max_width + 2, self.MIN_COLUMN_WIDTH), self.MAX_COLUMN_WIDTH
            )
            worksheet.column_dimensions[column_letter].width = adjusted_width

    @staticmethod
    def clean_value(value: Any) -> Any:
        """
        Strip characters openpyxl refuses to write (\\x00-\\x1f except tab, LF, CR).

        Non-string values are returned unchanged.

        Examples:
            >>> ExcelWriterService.clean_value("line\\x01break")
            'linebreak'
            >>> ExcelWriterService.clean_value(10)
            10
        """
        if isinstance(value, str):
            return ILLEGAL_CHARACTERS_RE.sub("", value)
        return value

    @classmethod
    def safe_sheet_title(cls, title: str, used_titles: set[str]) -> str:
        """
        Convert a logical sheet title into a valid, unique Excel title.

        Rules:
            - Forbidden characters []:*?/\\ are replaced with "_"
            - Control characters are dropped
            - Empty titles become EMPTY_TITLE_FALLBACK
            - Titles are cut to 31 characters
            - Case-insensitive duplicates get a " (2)", " (3)", ... suffix

        Args:
            title: Logical title (may be any string)
            used_titles: Lowercased titles already used in the workbook

        Returns:
            Title accepted by Excel and not in used_titles

        Examples:
            >>> ExcelWriterService.safe_sheet_title("a/b", set())
            'a_b'
            >>> ExcelWriterService.safe_sheet_title("", set())
            '(empty)'
            >>> ExcelWriterService.safe_sheet_title("East", {"east"})
            'East (2)'
        """
        cleaned = cls.FORBIDDEN_TITLE_CHARS.sub("_", cls.clean_value(title)).strip("'")
        if not cleaned.strip():
            cleaned = cls.EMPTY_TITLE_FALLBACK
        cleaned = cleaned[: cls.MAX_TITLE_LENGTH]

        candidate = cleaned
        counter = 2
        while candidate.lower() in used_titles:
            suffix = f" ({counter})"
            candidate = cleaned[: cls.MAX_TITLE_LENGTH - len(suffix)] + suffix
            counter += 1
        return candidate

    @classmethod
    def build_file_name(cls, title: str, file_id: str) -> str:
        """
        Derive the download file name from the report title.

        Examples:
            >>> ExcelWriterService.build_file_name("Q1: sales", "abc")
            'Q1_ sales.xlsx'
            >>> ExcelWriterService.build_file_name("  ", "abc")
            'abc.xlsx'
        """
        stem = cls.FORBIDDEN_FILE_NAME_CHARS.sub("_", title or "").strip(" .")
        stem = stem[: cls.MAX_FILE_NAME_STEM]
        if not stem:
            stem = file_id
        return f"{stem}{ARTIFACT_EXTENSION}"
