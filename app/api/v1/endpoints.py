# app/api/v1/endpoints.py
from fastapi import APIRouter
from time import perf_counter
from app.config import settings
from app.core.analyzer import RiskPolicy, analyze
from app.core.errors import InvalidInput, MissingCredential
from app.core.github_client import PRFetcher, parse_pr_url
from app.core.logger import get_logger
from app.core.markdown import to_markdown
from app.api.v1.schemas import AnalyzePRRequest, AnalyzePRResponse, ErrorResponse

router = APIRouter()
log = get_logger(__name__)

def get_fetcher(token: str) -> PRFetcher:
    return PRFetcher(token)

@router.post(
    "/analyze",
    response_model=AnalyzePRResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def analyze_pr(payload: AnalyzePRRequest):
    ref = parse_pr_url(payload.pr_url)
    if not ref:
        raise InvalidInput()

    token = settings.GITHUB_TOKEN
    if not token:
        raise MissingCredential()

    log.info("analysis_requested", repo=ref.full_name, number=ref.number)
    start = perf_counter()

    fetcher = get_fetcher(token)
    pull = fetcher.get_pull(ref)
    files = fetcher.list_files(pull)

    report = analyze(files, RiskPolicy.from_settings(settings))
    pr = fetcher.summarize(pull)

    elapsed_ms = int((perf_counter() - start) * 1000)
    log.info("analysis_done", repo=ref.full_name, number=ref.number,
             level=report.risk.level, score=report.risk.score, elapsed_ms=elapsed_ms)
    return AnalyzePRResponse(pr=pr, report=report, markdown=to_markdown(pr, report))
