"""Tests for PR URL parsing and the paginated file-list fetch."""

from unittest.mock import MagicMock

import pytest
import requests
from github import Github, GithubException

from app.core.errors import UpstreamFailure
from app.core.github_client import PRFetcher, PullRef, parse_pr_url
from app.core.models import FileChange


def _gh_file(name, additions=1, deletions=0, status="modified"):
    f = MagicMock()
    f.filename = name
    f.additions = additions
    f.deletions = deletions
    f.changes = additions + deletions
    f.status = status
    return f


def _client(per_page=100):
    client = MagicMock()
    client.per_page = per_page
    return client


def _pull_with_pages(pages):
    pull = MagicMock()
    pull.get_files.return_value.get_page.side_effect = lambda i: pages[i]
    return pull


class TestParsePrUrl:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://github.com/vercel/next.js/pull/1", PullRef("vercel", "next.js", 1)),
            ("http://www.github.com/acme/web/pull/42/files", PullRef("acme", "web", 42)),
            ("  https://GitHub.com/acme/web/pull/7/commits/abc  ", PullRef("acme", "web", 7)),
        ],
    )
    def test_valid(self, url, expected):
        assert parse_pr_url(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "",
            None,
            "github.com/acme/web/pull/1",
            "https://github.com/acme/web/issues/1",
            "https://gitlab.com/acme/web/pull/1",
            "https://github.com/acme/web/pull/abc",
        ],
    )
    def test_invalid(self, url):
        assert parse_pr_url(url) is None

    def test_full_name(self):
        assert PullRef("acme", "web", 3).full_name == "acme/web"


class TestListFiles:
    def test_stops_on_short_page(self):
        pages = [
            [_gh_file("a.py"), _gh_file("b.py")],
            [_gh_file("c.py"), _gh_file("d.py")],
            [_gh_file("e.py")],
        ]
        pull = _pull_with_pages(pages)
        fetcher = PRFetcher("token", per_page=2, client=MagicMock())

        files = fetcher.list_files(pull)

        assert [f.filename for f in files] == ["a.py", "b.py", "c.py", "d.py", "e.py"]
        requested = [c.args[0] for c in pull.get_files.return_value.get_page.call_args_list]
        assert requested == [0, 1, 2]

    def test_full_last_page_requests_one_more(self):
        pages = [[_gh_file("a.py"), _gh_file("b.py")], []]
        pull = _pull_with_pages(pages)
        fetcher = PRFetcher("token", per_page=2, client=MagicMock())

        assert len(fetcher.list_files(pull)) == 2
        assert pull.get_files.return_value.get_page.call_count == 2

    def test_converts_to_file_changes(self):
        pull = _pull_with_pages([[_gh_file("src/app.py", 4, 2, status="renamed")]])
        files = PRFetcher("token", client=_client()).list_files(pull)
        assert files == [FileChange(filename="src/app.py", additions=4, deletions=2, changes=6, status="renamed")]

    def test_upstream_error_is_wrapped(self):
        pull = MagicMock()
        pull.get_files.return_value.get_page.side_effect = GithubException(403, {"message": "API rate limit exceeded"}, None)
        with pytest.raises(UpstreamFailure) as exc:
            PRFetcher("token", client=_client()).list_files(pull)
        assert exc.value.message == "API rate limit exceeded"
        assert exc.value.status_code == 500

    def test_page_size_follows_injected_client(self):
        pages = [[_gh_file(f"f{i}.md") for i in range(30)], [_gh_file("last.md")]]
        pull = _pull_with_pages(pages)
        fetcher = PRFetcher("token", client=_client(per_page=30))

        files = fetcher.list_files(pull)

        assert fetcher.per_page == 30
        assert len(files) == 31
        assert pull.get_files.return_value.get_page.call_count == 2

    def test_page_size_of_default_pygithub_client(self):
        assert PRFetcher("token", client=Github()).per_page == Github().per_page

    def test_explicit_page_size_wins(self):
        assert PRFetcher("token", per_page=50, client=_client(per_page=30)).per_page == 50


class TestGetPull:
    def test_fetches_by_full_name(self):
        client = MagicMock()
        fetcher = PRFetcher("token", client=client)
        pull = fetcher.get_pull(PullRef("acme", "web", 9))
        client.get_repo.assert_called_once_with("acme/web")
        client.get_repo.return_value.get_pull.assert_called_once_with(9)
        assert pull is client.get_repo.return_value.get_pull.return_value

    def test_not_found(self):
        client = MagicMock()
        client.get_repo.return_value.get_pull.side_effect = GithubException(404, {"message": "Not Found"}, None)
        with pytest.raises(UpstreamFailure, match="Not Found"):
            PRFetcher("token", client=client).get_pull(PullRef("acme", "web", 9))

    def test_network_error(self):
        client = MagicMock()
        client.get_repo.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(UpstreamFailure, match="connection refused"):
            PRFetcher("token", client=client).get_pull(PullRef("acme", "web", 9))


class TestSummarize:
    def test_summary_fields(self):
        pull = MagicMock()
        pull.title = "Fix bug"
        pull.html_url = "https://github.com/acme/web/pull/9"
        pull.user.login = "octocat"
        pull.base.repo.full_name = "acme/web"
        pr = PRFetcher.summarize(pull)
        assert pr.title == "Fix bug"
        assert pr.url == "https://github.com/acme/web/pull/9"
        assert pr.author == "octocat"
        assert pr.repo == "acme/web"

    def test_missing_user(self):
        pull = MagicMock()
        pull.title = "Fix bug"
        pull.html_url = "u"
        pull.user = None
        pull.base = None
        pr = PRFetcher.summarize(pull)
        assert pr.author is None
        assert pr.repo is None
