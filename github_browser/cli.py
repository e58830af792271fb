"""Command-line interface for the GitHub browser.

Browse users, repositories, READMEs, issues and pull requests from the
terminal, with the same login, cache and rate-limit tracking as the
library.

Usage:
    github-browser login ghp_xxx
    github-browser repo python/cpython
    github-browser issues python/cpython --state all --search "crash"
    github-browser cache sweep
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from github_browser import GitHubClient
from github_browser.exceptions import GitHubBrowserError, RateLimitError
from github_browser.listing import ListState, ListView
from github_browser.utils.logger import configure_logging

# ============================================================================
# Display Utilities
# ============================================================================


def format_header(text: str) -> str:
    """Format a header string."""
    return f"\n{'=' * 60}\n  {text}\n{'=' * 60}"


def format_json(data: Any) -> str:
    """Format data as JSON."""
    return json.dumps(data, indent=2, default=str)


def repo_path(value: str) -> tuple[str, str]:
    """Parse an ``owner/repo`` argument."""
    owner, sep, name = value.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        raise argparse.ArgumentTypeError(f"expected OWNER/REPO, got {value!r}")
    return owner, name


# ============================================================================
# Command Handlers
# ============================================================================


async def cmd_login(client: GitHubClient, args: argparse.Namespace) -> int:
    """Validate and store a personal access token."""
    token = args.token if args.token is not None else getpass.getpass("GitHub token: ")
    result = await client.session.login(token)
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    user = await client.users.get_authenticated()
    print(f"Logged in as {user.login}")
    return 0


async def cmd_logout(client: GitHubClient, args: argparse.Namespace) -> int:
    """Forget the stored token."""
    await client.session.logout()
    print("Logged out")
    return 0


async def cmd_whoami(client: GitHubClient, args: argparse.Namespace) -> int:
    """Show the signed-in user."""
    if not await client.session.is_logged_in():
        print("Not logged in. Run: github-browser login", file=sys.stderr)
        return 1

    user = await client.users.get_authenticated()
    if args.json:
        print(format_json(user.model_dump()))
    else:
        print(format_header(f"Authenticated as: {user.login}"))
        print(f"  Name:         {user.name or 'N/A'}")
        print(f"  Email:        {user.email or 'N/A'}")
        print(f"  Public Repos: {user.public_repos}")
    return 0


async def cmd_user(client: GitHubClient, args: argparse.Namespace) -> int:
    """Fetch and display a user's profile."""
    user = await client.users.get(args.username)
    if args.json:
        print(format_json(user.model_dump()))
    else:
        print(format_header(f"User: {user.login}"))
        print(f"  Name:         {user.name or 'N/A'}")
        print(f"  Bio:          {user.bio or 'N/A'}")
        print(f"  Location:     {user.location or 'N/A'}")
        print(f"  Company:      {user.company or 'N/A'}")
        print(f"  Public Repos: {user.public_repos}")
        print(f"  Followers:    {user.followers}")
        print(f"  URL:          {user.html_url}")
    return 0


async def cmd_repo(client: GitHubClient, args: argparse.Namespace) -> int:
    """Fetch and display repository info with languages and contributors."""
    owner, name = args.repo
    repository = await client.repos.get(owner, name)
    languages = await client.repos.get_languages(owner, name)
    contributors = await client.repos.list_contributors(owner, name, limit=args.limit)

    if args.json:
        print(
            format_json(
                {
                    "repository": repository.model_dump(),
                    "languages": languages,
                    "contributors": [c.model_dump() for c in contributors],
                }
            )
        )
        return 0

    print(format_header(f"Repository: {repository.full_name}"))
    print(f"  Description:  {repository.description or 'N/A'}")
    print(f"  Stars:        {repository.stargazers_count:,}")
    print(f"  Forks:        {repository.forks_count:,}")
    print(f"  Open Issues:  {repository.open_issues_count:,}")
    license_name = repository.license.name if repository.license else "N/A"
    print(f"  License:      {license_name}")
    print(f"  URL:          {repository.html_url}")

    total = sum(languages.values())
    if total:
        print("\n  Languages:")
        for lang, size in sorted(languages.items(), key=lambda kv: kv[1], reverse=True):
            print(f"    {lang:<20} {size / total:6.1%}")

    if contributors:
        print("\n  Top contributors:")
        for i, contributor in enumerate(contributors, 1):
            print(f"    {i:2}. {contributor.login} ({contributor.contributions:,})")
    return 0


async def cmd_readme(client: GitHubClient, args: argparse.Namespace) -> int:
    """Print a repository's README."""
    owner, name = args.repo
    readme = await client.repos.get_readme_with_content(owner, name)
    if readme is None:
        print(f"No README found for {owner}/{name}", file=sys.stderr)
        return 1

    if args.json:
        print(format_json(readme.model_dump()))
    else:
        print(readme.content)
    return 0


async def cmd_list(client: GitHubClient, args: argparse.Namespace) -> int:
    """List issues or pull requests, optionally filtered by search text."""
    owner, name = args.repo
    view = ListView(client, owner, name, kind=args.command, state=args.state, debounce=0)

    if args.search and args.search.strip():
        view.set_query(args.search)
        await view.wait_for_query()
    else:
        await view.reload()

    for _ in range(1, args.pages):
        if not view.has_more or view.status is ListState.ERROR:
            break
        await view.load_more()

    if view.status is ListState.ERROR and not view.items:
        print(f"Error: {view.error}", file=sys.stderr)
        return 1

    if args.json:
        print(format_json([item.model_dump() for item in view.items]))
    else:
        label = "Issues" if args.command == "issues" else "Pull requests"
        print(format_header(f"{label}: {owner}/{name} ({view.state_filter})"))
        for item in view.items:
            print(f"  #{item.number:<6} [{item.state}] {item.title}")
        if view.has_more:
            print(f"\n  More available: use --pages {view.page + 1}")

    if view.status is ListState.ERROR:
        print(f"Error: {view.error}", file=sys.stderr)
        return 1
    return 0


async def cmd_search_repos(client: GitHubClient, args: argparse.Namespace) -> int:
    """Search repositories."""
    results = await client.search.repos(args.query, per_page=args.limit)
    if args.json:
        print(
            format_json(
                {
                    "total_count": results.total_count,
                    "items": [r.model_dump() for r in results.items],
                }
            )
        )
        return 0

    print(format_header(f"Search: {args.query}"))
    print(f"  Found {results.total_count:,} repositories (showing {len(results.items)})\n")
    for i, repo in enumerate(results.items, 1):
        stars = f"* {repo.stargazers_count:,}".ljust(12)
        print(f"  {i:2}. {stars} {repo.full_name}")
        if repo.description:
            desc = (
                repo.description[:55] + "..." if len(repo.description) > 55 else repo.description
            )
            print(f"               {desc}")
    return 0


async def cmd_rate_limit(client: GitHubClient, args: argparse.Namespace) -> int:
    """Show current rate limit status."""
    if client.rate_limit is None:
        # Any uncached response carries the headers
        await client.search.repos("github-browser", per_page=1)

    info = client.rate_limit
    if args.json:
        print(format_json(None if info is None else asdict(info)))
        return 0

    print(format_header("Rate Limit Status"))
    if info is None:
        print("  Not yet tracked")
    else:
        print(f"  Remaining:  {info.remaining}/{info.limit} ({info.utilization:.0%} used)")
        print(f"  Resets at:  {info.reset_at.isoformat()}")
    return 0


async def cmd_cache(client: GitHubClient, args: argparse.Namespace) -> int:
    """Clear or sweep the response cache."""
    if args.action == "clear":
        removed = await client.clear_cache()
        print(f"Removed {removed} cached responses")
    else:
        removed = await client.sweep_cache()
        print(f"Removed {removed} expired cached responses")
    print(f"{await client.cache_size()} cached responses remain")
    return 0


# ============================================================================
# Argument Parser
# ============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="github-browser",
        description="GitHub Browser - Browse GitHub repositories from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  github-browser login                       Sign in with a token
  github-browser user octocat                Fetch user profile
  github-browser repo python/cpython         Fetch repository info
  github-browser readme python/cpython       Print the README
  github-browser issues python/cpython -s x  Search open issues
  github-browser search-repos "stars:>50000" Search repositories
  github-browser rate-limit                  Show rate limit status
        """,
    )

    parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests to stderr")
    parser.add_argument("--no-cache", action="store_true", help="Disable caching")
    parser.add_argument("--db", help="Local database file")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # login
    p = subparsers.add_parser("login", help="Sign in with a personal access token")
    p.add_argument("token", nargs="?", help="Token (prompted for if omitted)")

    # logout / whoami
    subparsers.add_parser("logout", help="Forget the stored token")
    subparsers.add_parser("whoami", help="Show the signed-in user")

    # user
    p = subparsers.add_parser("user", help="Get user profile")
    p.add_argument("username", help="GitHub username")

    # repo
    p = subparsers.add_parser("repo", help="Get repository info")
    p.add_argument("repo", type=repo_path, help="OWNER/REPO")
    p.add_argument(
        "-n", "--limit", type=int, default=10, help="Number of contributors (default: 10)"
    )

    # readme
    p = subparsers.add_parser("readme", help="Print a repository's README")
    p.add_argument("repo", type=repo_path, help="OWNER/REPO")

    # issues / pulls
    for name, noun in (("issues", "issues"), ("pulls", "pull requests")):
        p = subparsers.add_parser(name, help=f"List {noun}")
        p.add_argument("repo", type=repo_path, help="OWNER/REPO")
        p.add_argument(
            "--state", choices=("open", "closed", "all"), default="open", help="Filter by state"
        )
        p.add_argument("-s", "--search", help="Free-text search")
        p.add_argument("--pages", type=int, default=1, help="Pages to load (default: 1)")

    # search-repos
    p = subparsers.add_parser("search-repos", help="Search repositories")
    p.add_argument("query", help="Search query")
    p.add_argument("-n", "--limit", type=int, default=10, help="Number of results (default: 10)")

    # rate-limit
    subparsers.add_parser("rate-limit", help="Show rate limit status")

    # cache
    p = subparsers.add_parser("cache", help="Manage the response cache")
    p.add_argument("action", choices=("clear", "sweep"), help="clear all or sweep expired")

    return parser


# ============================================================================
# Main Entry Point
# ============================================================================

# Command dispatch table
COMMANDS: dict[str, Callable[[GitHubClient, argparse.Namespace], Awaitable[int]]] = {
    "login": cmd_login,
    "logout": cmd_logout,
    "whoami": cmd_whoami,
    "user": cmd_user,
    "repo": cmd_repo,
    "readme": cmd_readme,
    "issues": cmd_list,
    "pulls": cmd_list,
    "search-repos": cmd_search_repos,
    "rate-limit": cmd_rate_limit,
    "cache": cmd_cache,
}


async def run(args: argparse.Namespace) -> int:
    """Run one command against a fresh client."""
    client = GitHubClient(db_path=args.db, cache_enabled=False if args.no_cache else None)
    async with client:
        try:
            return await COMMANDS[args.command](client, args)
        except RateLimitError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            if e.reset:
                reset_at = datetime.fromtimestamp(e.reset, tz=timezone.utc)
                print(f"Resets at: {reset_at.isoformat()}", file=sys.stderr)
            return 1
        except GitHubBrowserError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.verbose:
        configure_logging(level=logging.DEBUG)

    try:
        return asyncio.run(run(args))
    except GitHubBrowserError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
