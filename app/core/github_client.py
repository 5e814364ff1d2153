# app/core/github_client.py
import re
from typing import List, NamedTuple, Optional

import requests
from github import Auth, Github, GithubException

from app.config import settings
from app.core.errors import UpstreamFailure
from app.core.logger import get_logger
from app.core.models import FileChange, PRSummary

log = get_logger(__name__)

# https://github.com/OWNER/REPO/pull/123, also /pull/123/files etc.
PR_URL_RE = re.compile(r"https?://(www\.)?github\.com/([^/]+)/([^/]+)/pull/(\d+)", re.IGNORECASE)


class PullRef(NamedTuple):
    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_pr_url(url: Optional[str]) -> Optional[PullRef]:
    m = PR_URL_RE.search((url or "").strip())
    if not m:
        return None
    return PullRef(owner=m.group(2), repo=m.group(3), number=int(m.group(4)))


def _upstream_message(e: Exception) -> str:
    data = getattr(e, "data", None)
    if isinstance(data, dict) and data.get("message"):
        return data["message"]
    return str(e) or "Unknown error"


class PRFetcher:
    def __init__(self, token: str, per_page: int = None, base_url: str = None, client: Github = None):
        # page-size check must use the size the client actually requests
        self.per_page = per_page or (client.per_page if client is not None else settings.GITHUB_PER_PAGE)
        self.gh = client or Github(
            auth=Auth.Token(token),
            base_url=base_url or settings.GITHUB_API_URL,
            per_page=self.per_page,
        )

    def get_pull(self, ref: PullRef):
        try:
            return self.gh.get_repo(ref.full_name).get_pull(ref.number)
        except (GithubException, requests.RequestException) as e:
            log.error("pull_fetch_failed", repo=ref.full_name, number=ref.number, error=str(e))
            raise UpstreamFailure(_upstream_message(e)) from e

    def list_files(self, pull) -> List[FileChange]:
        """Fetch every changed file of a PR.

        Pages are requested until one comes back shorter than ``per_page``;
        a PR's file list is only complete once that short page is seen.
        """
        files: List[FileChange] = []
        paginated = pull.get_files()
        page = 0
        try:
            while True:
                batch = paginated.get_page(page)
                files.extend(
                    FileChange(
                        filename=f.filename,
                        additions=f.additions,
                        deletions=f.deletions,
                        changes=f.changes,
                        status=f.status,
                    )
                    for f in batch
                )
                if len(batch) < self.per_page:
                    break
                page += 1
        except (GithubException, requests.RequestException) as e:
            log.error("files_fetch_failed", page=page, error=str(e))
            raise UpstreamFailure(_upstream_message(e)) from e
        log.info("files_fetched", pages=page + 1, files=len(files))
        return files

    @staticmethod
    def summarize(pull) -> PRSummary:
        user = getattr(pull, "user", None)
        base = getattr(pull, "base", None)
        repo = getattr(base, "repo", None)
        return PRSummary(
            title=pull.title or "",
            url=pull.html_url or "",
            author=getattr(user, "login", None),
            repo=getattr(repo, "full_name", None),
        )
