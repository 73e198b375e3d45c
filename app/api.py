"""
FastAPI routes for statement upload and conversion.
Nothing is stored: each request converts the uploaded bytes and returns the result.
"""
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response

from core.config import get_settings
from core.logger import setup_logger
from core.schema import ProcessResult
from services.statement_service import StatementService

logger = setup_logger(__name__)
settings = get_settings()

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Convert bank statement spreadsheets into budget import CSV files",
    version="1.0.0"
)

# Service instance
statement_service = StatementService()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "statement_converter",
        "version": "1.0.0"
    }


def validate_file_extension(filename: str) -> None:
    """
    Validate file has correct extension.

    Args:
        filename: Name of file to validate

    Raises:
        HTTPException: If file extension is invalid
    """
    if not filename or not filename.lower().endswith((".xlsx", ".xls")):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type: {filename}. Only .xlsx and .xls are supported."
        )


async def convert_upload(file: UploadFile) -> ProcessResult:
    """
    Validate an upload and run it through the conversion pipeline.

    Raises:
        HTTPException: 400/413 for bad uploads, 422 if the statement is rejected
    """
    logger.info(f"Received file: {file.filename}")
    validate_file_extension(file.filename)

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {settings.max_upload_mb} MB upload limit"
        )

    result = await statement_service.process_async(content)
    if not result.ok:
        logger.warning(f"Rejected {file.filename}: {result.errors}")
        raise HTTPException(status_code=422, detail={"errors": result.errors})

    return result


@app.post("/process")
async def process_statement(file: UploadFile = File(...)):
    """
    Convert a statement and return transactions, row errors and CSV text.

    Args:
        file: Bank statement workbook

    Returns:
        Conversion result as JSON
    """
    result = await convert_upload(file)
    return {
        "filename": result.csv.filename,
        "transactions": [t.model_dump() for t in result.transactions],
        "errors": result.errors,
        "csv": result.csv.text,
    }


@app.post("/process/csv")
async def download_csv(file: UploadFile = File(...)):
    """
    Convert a statement and return the CSV as an attachment.

    Args:
        file: Bank statement workbook

    Returns:
        CSV file response; X-Row-Errors holds the number of skipped rows
    """
    result = await convert_upload(file)
    return Response(
        content=result.csv.content,
        media_type=result.csv.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.csv.filename}"',
            "X-Row-Errors": str(len(result.errors)),
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
