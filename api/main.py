"""
FastAPI Backend for Chat-Log Expense Tracker
RESTful API endpoints for parsing expense chat logs
"""

from fastapi import FastAPI, File, UploadFile, Form, HTTPException
from fastapi.responses import FileResponse, JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Optional
from pathlib import Path
from datetime import datetime
import logging
import sys

# Add backend to path
backend_path = Path(__file__).parent.parent / 'backend'
sys.path.insert(0, str(backend_path))

# Import backend modules
from config import config
from logging_config import setup_logging
from main import ExpenseLogPipeline
from output.writer import generate_pdf_report, ReportWriteError
from validators.expense_validator import ValidationError

setup_logging(log_file=config.LOG_FILE)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Chat-Log Expense Tracker API",
    description="Extract and summarize expenses noted in exported chat logs",
    version=config.VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

REPORTS_DIR = config.OUTPUT_DIR / "api_reports"


class ParseRequest(BaseModel):
    """Body of POST /parse."""
    text: str = Field(..., description="Chat export text, one message per line")
    fallback_year: Optional[int] = Field(None, description="Year for dates written without one")
    year_policy: Optional[str] = Field(None, description="'fixed' or 'next_after_latest'")
    category_names: Optional[dict[str, str]] = Field(None, description="Category code -> display name")


def _build_pipeline(
    fallback_year: Optional[int],
    year_policy: Optional[str],
    category_names: Optional[dict[str, str]] = None
) -> ExpenseLogPipeline:
    try:
        return ExpenseLogPipeline(
            fallback_year=fallback_year,
            year_policy=year_policy,
            category_names=category_names
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _report_path(filename: str) -> Path:
    """Resolve a report name inside REPORTS_DIR, refusing anything that escapes it."""
    if Path(filename).name != filename or not filename.endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Invalid report name")
    return REPORTS_DIR / filename


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {
        "message": "Chat-Log Expense Tracker API",
        "version": config.VERSION,
        "endpoints": {
            "POST /parse": "Parse chat text and return transactions and aggregates",
            "POST /upload": "Parse an uploaded chat export and generate a PDF report",
            "GET /health": "Health check",
            "GET /reports": "List generated reports",
            "GET /reports/{filename}": "Download generated report"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat()
    }


@app.post("/parse")
async def parse_text(request: ParseRequest):
    """
    Parse chat text into transactions, category totals, monthly totals and summary.

    Lines that are not expense notes are ignored; text without any yields an
    empty result whose average is reported as "No data".
    """
    pipeline = _build_pipeline(request.fallback_year, request.year_policy, request.category_names)

    try:
        report = pipeline.process_text(request.text)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error parsing text: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    return {"status": "success", **report.to_dict()}


@app.post("/upload")
async def upload_chat_log(
    file: UploadFile = File(..., description="Exported chat (.txt)"),
    fallback_year: Optional[int] = Form(None, description="Year for dates written without one"),
    year_policy: Optional[str] = Form(None, description="'fixed' or 'next_after_latest'")
):
    """
    Parse an uploaded chat export and generate a PDF report.

    Returns the parsed result plus a download link for the report.
    """
    content = await file.read()

    is_valid, error = config.validate_file(file.filename or "", len(content))
    if not is_valid:
        raise HTTPException(status_code=400, detail=error)

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File is not valid UTF-8 text")

    pipeline = _build_pipeline(fallback_year, year_policy)

    try:
        logger.info(f"Processing upload {file.filename} ({len(content)} bytes)")
        report = pipeline.process_text(text)

        if not report.transactions:
            return JSONResponse(
                status_code=200,
                content={
                    "status": "no_transactions",
                    "message": "No expense lines found in the uploaded chat log",
                    **report.to_dict()
                }
            )

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        report_filename = f"report_{timestamp}.pdf"
        REPORTS_DIR.mkdir(parents=True, exist_ok=True)

        generate_pdf_report(
            output_path=str(REPORTS_DIR / report_filename),
            transactions=report.transactions,
            category_totals=report.category_totals,
            monthly_totals=report.monthly_totals,
            summary=report.summary,
            title=f"Expense Report - {Path(file.filename).stem}",
            category_names=report.category_names
        )
        logger.info(f"Report generated: {report_filename}")

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ReportWriteError as e:
        logger.error(f"Report generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error processing upload: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    return {
        "status": "success",
        "message": "Report generated successfully",
        "report": {
            "filename": report_filename,
            "download_url": f"/reports/{report_filename}",
            "generated_at": datetime.now().isoformat()
        },
        **report.to_dict()
    }


@app.get("/reports/{filename}")
async def download_report(filename: str):
    """
    Download a generated PDF report.

    - **filename**: Name of the report file to download
    """
    report_path = _report_path(filename)

    if not report_path.exists():
        raise HTTPException(status_code=404, detail="Report not found")

    return FileResponse(
        path=str(report_path),
        media_type="application/pdf",
        filename=filename
    )


@app.get("/reports")
async def list_reports():
    """List all available reports"""
    reports = []

    if REPORTS_DIR.exists():
        for report_file in REPORTS_DIR.glob("*.pdf"):
            reports.append({
                "filename": report_file.name,
                "created_at": datetime.fromtimestamp(report_file.stat().st_ctime).isoformat(),
                "size_bytes": report_file.stat().st_size,
                "download_url": f"/reports/{report_file.name}"
            })

    # Sort by creation time (newest first)
    reports.sort(key=lambda x: x['created_at'], reverse=True)

    return {
        "total_reports": len(reports),
        "reports": reports
    }


@app.delete("/reports/{filename}")
async def delete_report(filename: str):
    """
    Delete a report file.

    - **filename**: Name of the report file to delete
    """
    report_path = _report_path(filename)

    if not report_path.exists():
        raise HTTPException(status_code=404, detail="Report not found")

    try:
        report_path.unlink()
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Error deleting report: {str(e)}")

    return {
        "status": "success",
        "message": f"Report {filename} deleted successfully"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
