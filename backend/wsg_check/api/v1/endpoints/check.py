"""
Check API endpoints.
"""
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException
from fastapi.responses import Response

from wsg_check.config import settings
from wsg_check.logger import logger
from wsg_check.schemas.check_request import CheckJobResponse, CheckRequest, CheckStatusResponse
from wsg_check.schemas.check_result import RunResult
from wsg_check.services.checks.registry import select_checks
from wsg_check.services.http_client import HttpClient
from wsg_check.services.page_fetcher import PageFetcher
from wsg_check.services.pdf_generator import PdfGenerator
from wsg_check.services.report_builder import build_report
from wsg_check.services.wsg_checker import WsgChecker

router = APIRouter(tags=["Check"])


@dataclass
class CheckJob:
    job_id: str
    url: str
    status: str = "pending"
    result: Optional[RunResult] = None
    error: Optional[str] = None


# In-memory job storage
_jobs: Dict[str, CheckJob] = {}


def get_checker(request: CheckRequest) -> WsgChecker:
    """Build a checker for an API request. The API always blocks private networks."""
    client = HttpClient(block_private_networks=True)
    checks = select_checks(
        [c.value for c in request.categories] if request.categories else settings.CATEGORIES,
        request.guidelines or settings.GUIDELINES,
        settings.EXCLUDE_GUIDELINES,
    )
    return WsgChecker(checks=checks, fetcher=PageFetcher(client).fetch)


@router.post("", response_model=CheckJobResponse, status_code=202)
async def start_check(request: CheckRequest, background_tasks: BackgroundTasks):
    """Start a new sustainability check."""
    job_id = str(uuid.uuid4())
    url = str(request.url)

    _jobs[job_id] = CheckJob(job_id=job_id, url=url)
    background_tasks.add_task(_run_check, job_id, request)

    logger.info(f"Started check {job_id} for {url}")
    return CheckJobResponse(job_id=job_id, status="pending", url=url)


async def _run_check(job_id: str, request: CheckRequest):
    """Background task to run the check."""
    job = _jobs[job_id]
    job.status = "running"

    try:
        result = await get_checker(request).check(job.url)
    except Exception as e:
        logger.exception(f"Check {job_id} crashed: {e}")
        job.status = "failed"
        job.error = str(e)
        return

    if result.ok:
        job.status = "completed"
        job.result = result.value
        logger.info(f"Completed check {job_id} (score {result.value.overall_score})")
    else:
        job.status = "failed"
        job.error = str(result.error)
        logger.warning(f"Check {job_id} failed: {result.error}")


def _get_job(job_id: str) -> CheckJob:
    job = _jobs.get(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Check not found")
    return job


@router.get("/{job_id}", response_model=CheckStatusResponse)
async def get_check(job_id: str):
    """Get check status and results."""
    job = _get_job(job_id)
    return CheckStatusResponse(
        job_id=job.job_id,
        status=job.status,
        url=job.url,
        result=job.result,
        error=job.error,
    )


@router.get("/{job_id}/pdf")
async def get_check_pdf(job_id: str):
    """Get the check report as PDF."""
    job = _get_job(job_id)
    if job.status != "completed" or job.result is None:
        raise HTTPException(status_code=400, detail="Check not completed yet")

    pdf_bytes = PdfGenerator().generate(build_report(job.result))

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=wsg_report_{job_id[:8]}.pdf"
        },
    )
