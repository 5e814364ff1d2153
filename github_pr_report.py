import os
import sys

import click
from dotenv import load_dotenv

from app.config import settings
from app.core.analyzer import RiskPolicy, analyze
from app.core.errors import AnalysisError, InvalidInput
from app.core.github_client import PRFetcher, parse_pr_url
from app.core.logger import setup_logging
from app.core.markdown import to_markdown

# --- Logging setup ---
# stdout carries the report, so log lines go to stderr
logger = setup_logging(os.getenv("LOG_LEVEL", "INFO"), stream=sys.stderr)

def build_report(pr_url, token):
    ref = parse_pr_url(pr_url)
    if not ref:
        raise InvalidInput()
    fetcher = PRFetcher(token)
    pull = fetcher.get_pull(ref)
    logger.info("analyzing_pr", repo=ref.full_name, number=ref.number, title=pull.title)
    files = fetcher.list_files(pull)
    report = analyze(files, RiskPolicy.from_settings(settings))
    return to_markdown(fetcher.summarize(pull), report)

@click.command()
@click.argument("pr_url")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), default=None,
              help="Write the Markdown report to this file instead of stdout.")
def main(pr_url, output):
    """Print a Markdown review report for the GitHub pull request at PR_URL."""
    load_dotenv()
    token = os.getenv("GITHUB_TOKEN") or settings.GITHUB_TOKEN
    if not token:
        logger.error("Missing GITHUB_TOKEN in .env")
        sys.exit(1)

    try:
        markdown = build_report(pr_url, token)
    except AnalysisError as e:
        logger.error("analysis_failed", pr_url=pr_url, error=e.message)
        sys.exit(1)

    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(markdown)
        logger.info("report_written", path=output)
    else:
        click.echo(markdown, nl=False)

if __name__ == "__main__":
    main()
