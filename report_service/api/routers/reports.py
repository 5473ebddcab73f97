"""
API Router for Excel Reports

Responsibility:
    HTTP interface for generating, listing, downloading and deleting
    spreadsheet reports.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Thin wrapper around Application Layer ReportService
    - Domain exceptions are NOT caught here; the global handler in main.py
      maps them to ErrorResponse with the right status code

Contains:
    - POST   /excel              - Generate single-sheet report
    - POST   /excel/auto         - Generate report partitioned by a column
    - GET    /excel              - List reports
    - GET    /excel/{file_id}    - Report metadata
    - GET    /excel/{file_id}/content - Download report (streamed)
    - DELETE /excel/{file_id}    - Delete report
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from report_service.api.dependencies import get_report_service
from report_service.api.schemas.common import ErrorResponse
from report_service.api.schemas.reports import (
    ExcelRequest,
    ExcelResponse,
    MultiSheetExcelRequest,
)
from report_service.application.services.report_service import ReportService
from report_service.domain.report.constants import ARTIFACT_MEDIA_TYPE


# ============================================================================
# ROUTER CONFIGURATION
# ============================================================================


router = APIRouter(
    prefix="/excel",
    tags=["excel"],
    responses={
        500: {"model": ErrorResponse, "description": "Report rendering failed"},
        503: {
            "model": ErrorResponse,
            "description": "Object store or metadata repository unavailable",
        },
    },
)


# ============================================================================
# ENDPOINTS
# ============================================================================


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ExcelResponse,
    summary="Generate a single-sheet report",
    responses={
        400: {"model": ErrorResponse, "description": "Row length differs from headers"},
    },
)
async def create_excel(
    request: ExcelRequest,
    service: ReportService = Depends(get_report_service),
) -> ExcelResponse:
    """
    Generate a report with one sheet holding all rows.

    Returns:
        ExcelResponse with the id to download or delete the report
    """
    artifact = await service.generate(request.to_report_request())
    return ExcelResponse.from_artifact(artifact)


@router.post(
    "/auto",
    status_code=status.HTTP_201_CREATED,
    response_model=ExcelResponse,
    summary="Generate a report with one sheet per value of a column",
    responses={
        400: {
            "model": ErrorResponse,
            "description": "splitBy is not a header, a splitBy value is not text, "
            "or row length differs from headers",
        },
    },
)
async def create_multi_sheet_excel(
    request: MultiSheetExcelRequest,
    service: ReportService = Depends(get_report_service),
) -> ExcelResponse:
    """
    Generate a report partitioned by request.split_by.

    Sheets are ordered by the partition value; rows keep their input order
    within each sheet.
    """
    artifact = await service.generate(request.to_report_request())
    return ExcelResponse.from_artifact(artifact)


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=list[ExcelResponse],
    summary="List generated reports",
)
async def list_excels(
    service: ReportService = Depends(get_report_service),
) -> list[ExcelResponse]:
    artifacts = await service.list()
    return [ExcelResponse.from_artifact(artifact) for artifact in artifacts]


@router.get(
    "/{file_id}",
    status_code=status.HTTP_200_OK,
    response_model=ExcelResponse,
    summary="Get report metadata",
    responses={404: {"model": ErrorResponse, "description": "Report not found"}},
)
async def get_excel(
    file_id: str = Path(..., description="Report id returned on generation"),
    service: ReportService = Depends(get_report_service),
) -> ExcelResponse:
    artifact = await service.get(file_id)
    return ExcelResponse.from_artifact(artifact)


@router.get(
    "/{file_id}/content",
    status_code=status.HTTP_200_OK,
    summary="Download report file",
    response_class=StreamingResponse,
    responses={
        200: {"content": {ARTIFACT_MEDIA_TYPE: {}}, "description": "Report file"},
        404: {"model": ErrorResponse, "description": "Report or its content not found"},
    },
)
async def download_excel(
    file_id: str = Path(..., description="Report id returned on generation"),
    service: ReportService = Depends(get_report_service),
) -> StreamingResponse:
    """
    Stream the stored report as an attachment.

    The file is passed through in chunks without loading it into memory.
    """
    stream = await service.fetch(file_id)
    artifact = stream.artifact

    return StreamingResponse(
        stream.iter_chunks(),
        media_type=ARTIFACT_MEDIA_TYPE,
        headers={
            "Content-Disposition": content_disposition(artifact.file_name),
            "Content-Length": str(artifact.file_size),
        },
        background=BackgroundTask(stream.close),
    )


@router.delete(
    "/{file_id}",
    status_code=status.HTTP_200_OK,
    response_model=ExcelResponse,
    summary="Delete report",
    responses={404: {"model": ErrorResponse, "description": "Report not found"}},
)
async def delete_excel(
    file_id: str = Path(..., description="Report id returned on generation"),
    service: ReportService = Depends(get_report_service),
) -> ExcelResponse:
    artifact = await service.delete(file_id)
    return ExcelResponse.from_artifact(artifact)


def content_disposition(file_name: str) -> str:
    """
    Build an attachment header valid for non-ASCII file names.

    Examples:
        >>> content_disposition("sales.xlsx")
        'attachment; filename="sales.xlsx"'
        >>> content_disposition("zestawienie ł.xlsx")
        "attachment; filename*=utf-8''zestawienie%20%C5%82.xlsx"
    """
    quoted = quote(file_name)
    if quoted == file_name:
        return f'attachment; filename="{file_name}"'
    return f"attachment; filename*=utf-8''{quoted}"
