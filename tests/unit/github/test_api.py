"""GitHub client tests against an in-process ``httpx.MockTransport``."""

from __future__ import annotations

import json
import unittest

import httpx

from githubdocs.errors import FetchError, GitHubApiError
from githubdocs.github import GitHubClient, RepoRef, parse_repo_url
from githubdocs.tree_model import Entry, EntryKind

REPO = RepoRef("octo", "demo")

REPO_PAYLOAD = {
    "name": "demo",
    "description": None,
    "owner": {"login": "octo"},
    "language": "Python",
    "license": None,
    "created_at": "2021-05-06T07:08:09Z",
    "updated_at": "2024-02-03T00:00:00Z",
    "stargazers_count": 10,
    "forks_count": 2,
    "subscribers_count": 3,
    "open_issues_count": 4,
    "default_branch": "trunk",
}


def _client(handler, **kwargs) -> GitHubClient:
    return GitHubClient(transport=httpx.MockTransport(handler), **kwargs)


class ParseRepoUrlTests(unittest.TestCase):
    def test_plain_and_git_suffix_urls(self) -> None:
        self.assertEqual(parse_repo_url("https://github.com/octo/demo"), REPO)
        self.assertEqual(parse_repo_url("https://github.com/octo/demo.git"), REPO)
        self.assertEqual(parse_repo_url("git@github.com/octo/demo"), REPO)

    def test_extra_path_segments_are_ignored(self) -> None:
        self.assertEqual(parse_repo_url("https://github.com/octo/demo/tree/main/src"), REPO)

    def test_non_github_urls_are_rejected(self) -> None:
        self.assertIsNone(parse_repo_url("https://gitlab.com/octo/demo"))
        self.assertIsNone(parse_repo_url("https://github.com/octo"))
        self.assertIsNone(parse_repo_url("https://github.com/octo/.git"))


class MetadataTests(unittest.TestCase):
    def test_repository_details_with_placeholders_and_languages(self) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            if request.url.path == "/repos/octo/demo":
                return httpx.Response(200, json=REPO_PAYLOAD)
            if request.url.path == "/repos/octo/demo/languages":
                return httpx.Response(200, json={"Python": 800, "Shell": 200})
            return httpx.Response(404)

        with _client(handler) as client:
            self.assertEqual(client.default_branch(REPO), "trunk")
            details = client.repository_details(REPO)

        self.assertEqual(details.description, "No description")
        self.assertEqual(details.license, "No license information")
        self.assertEqual(details.created_at, "2021-05-06")
        self.assertEqual(details.watchers, 3)
        self.assertEqual(details.languages, {"Python": 800, "Shell": 200})
        self.assertEqual(calls.count("/repos/octo/demo"), 1)

    def test_token_is_sent_as_bearer_header(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization", "")
            return httpx.Response(200, json=REPO_PAYLOAD)

        with _client(handler, token="secret") as client:
            client.default_branch(REPO)
        self.assertEqual(seen["auth"], "Bearer secret")

    def test_http_error_raises_api_error(self) -> None:
        with _client(lambda request: httpx.Response(404, json={"message": "Not Found"})) as client:
            with self.assertRaises(GitHubApiError):
                client.default_branch(REPO)

    def test_network_error_raises_api_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        with _client(handler) as client:
            with self.assertRaises(GitHubApiError):
                client.repository_details(REPO)

    def test_contributors_respect_limit_and_skip_malformed(self) -> None:
        payload = [
            {"login": "alice", "contributions": 9, "avatar_url": "https://a/alice", "html_url": "https://github.com/alice"},
            {"contributions": 1},
            {"login": "bob", "contributions": 2, "avatar_url": None, "html_url": "https://github.com/bob"},
            {"login": "carol", "contributions": 1},
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.params["per_page"], "3")
            return httpx.Response(200, json=payload)

        with _client(handler) as client:
            contributors = client.contributors(REPO, limit=3)

        self.assertEqual([c.login for c in contributors], ["alice", "bob"])
        self.assertEqual(contributors[1].avatar_url, "")


class TreeTests(unittest.TestCase):
    def test_tree_requests_recursive_listing(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.path, "/repos/octo/demo/git/trees/main")
            self.assertEqual(request.url.params["recursive"], "1")
            return httpx.Response(
                200,
                json={
                    "truncated": False,
                    "tree": [
                        {"path": "src", "type": "tree"},
                        {"path": "src/a.py", "type": "blob"},
                        {"path": "ext", "type": "commit"},
                    ],
                },
            )

        with _client(handler) as client:
            entries = client.tree(REPO, "main")
        self.assertEqual(entries, [Entry("src", EntryKind.DIRECTORY), Entry("src/a.py", EntryKind.FILE)])

    def test_truncated_tree_is_logged(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"truncated": True, "tree": []})

        with _client(handler) as client, self.assertLogs("githubdocs.github.api", level="WARNING"):
            self.assertEqual(client.tree(REPO, "main"), [])

    def test_malformed_tree_payload_raises(self) -> None:
        with _client(lambda request: httpx.Response(200, json={"sha": "x"})) as client:
            with self.assertRaises(GitHubApiError):
                client.tree(REPO, "main")


class FileContentTests(unittest.TestCase):
    def test_json_file_is_returned_as_literal_text(self) -> None:
        raw = '{\n    "b": 1,   "a": [1,2]\n}\n'

        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.host, "raw.githubusercontent.com")
            self.assertEqual(request.url.path, "/octo/demo/main/conf/settings.json")
            return httpx.Response(200, content=raw.encode("utf-8"), headers={"Content-Type": "application/json"})

        with _client(handler) as client:
            self.assertEqual(client.file_content(REPO, "conf/settings.json", "main"), raw)
        self.assertNotEqual(raw, json.dumps(json.loads(raw)))

    def test_missing_file_raises_fetch_error(self) -> None:
        with _client(lambda request: httpx.Response(404)) as client:
            with self.assertRaises(FetchError) as ctx:
                client.file_content(REPO, "gone.txt", "main")
        self.assertEqual(ctx.exception.path, "gone.txt")

    def test_timeout_raises_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with _client(handler) as client:
            with self.assertRaises(FetchError):
                client.file_content(REPO, "slow.txt", "main")


if __name__ == "__main__":
    unittest.main()
