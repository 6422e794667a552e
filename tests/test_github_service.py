"""Tests for the GitHub service and PyGithub adapter."""

import types
from unittest.mock import MagicMock

import pytest

from fakes import FakePlatform, make_file
from src.core.exceptions import PublishError
from src.services.github.client import GitHubPlatform
from src.services.github.service import get_changed_files, get_comments, publish_comment


def files(count):
    return [make_file(f"f{i}.py") for i in range(count)]


class TestGetChangedFiles:
    def test_single_short_page(self):
        platform = FakePlatform(files=files(3))

        result = get_changed_files(platform, "acme", "widgets", 7, page_size=100)

        assert [f.filename for f in result] == ["f0.py", "f1.py", "f2.py"]
        assert platform.calls == [("list_changed_files", 7, 0, 100)]

    def test_follows_pages_until_short_page(self):
        platform = FakePlatform(files=files(25))

        result = get_changed_files(platform, "acme", "widgets", 7, page_size=10, max_files=100)

        assert len(result) == 25
        assert [c[2] for c in platform.calls] == [0, 1, 2]

    def test_exact_multiple_needs_one_empty_page(self):
        platform = FakePlatform(files=files(20))

        result = get_changed_files(platform, "acme", "widgets", 7, page_size=10, max_files=100)

        assert len(result) == 20
        assert [c[2] for c in platform.calls] == [0, 1, 2]

    def test_stops_at_max_files(self):
        platform = FakePlatform(files=files(50))

        result = get_changed_files(platform, "acme", "widgets", 7, page_size=10, max_files=15)

        assert [f.filename for f in result] == [f"f{i}.py" for i in range(15)]
        assert [c[2] for c in platform.calls] == [0, 1]


class TestPublishComment:
    def test_posts_body_verbatim(self):
        platform = FakePlatform()

        publish_comment(platform, "acme", "widgets", 7, "## Review\n\nAll good.")

        assert platform.created == [("acme", "widgets", 7, "## Review\n\nAll good.")]

    def test_every_call_creates_a_comment(self):
        platform = FakePlatform()

        publish_comment(platform, "acme", "widgets", 7, "same")
        publish_comment(platform, "acme", "widgets", 7, "same")

        assert len(platform.created) == 2

    def test_platform_error_becomes_publish_error(self):
        platform = FakePlatform(create_error=RuntimeError("403 Forbidden"))

        with pytest.raises(PublishError) as exc:
            publish_comment(platform, "acme", "widgets", 7, "body")

        assert exc.value.target == "acme/widgets#7"
        assert isinstance(exc.value.__cause__, RuntimeError)


class TestGitHubPlatform:
    def _platform(self):
        client = MagicMock()
        repository = client.get_repo.return_value
        return GitHubPlatform(client, bot_login="pga-github-app"), client, repository

    def test_list_changed_files_maps_records(self):
        platform, _, repository = self._platform()
        raw = types.SimpleNamespace(
            filename="img.png", status="added", additions=0, deletions=0, changes=0, patch=None
        )
        repository.get_pull.return_value.get_files.return_value.get_page.return_value = [raw]

        result = platform.list_changed_files("acme", "widgets", 7, page=2)

        repository.get_pull.assert_called_once_with(7)
        repository.get_pull.return_value.get_files.return_value.get_page.assert_called_once_with(2)
        assert result[0].filename == "img.png"
        assert result[0].patch is None

    def test_list_changed_files_applies_page_size(self):
        platform, client, repository = self._platform()
        client.per_page = 100
        repository.get_pull.return_value.get_files.return_value.get_page.return_value = []

        platform.list_changed_files("acme", "widgets", 7, page=0, per_page=25)

        assert client.per_page == 25

    def test_get_file_content_omits_missing_ref(self):
        platform, _, repository = self._platform()

        platform.get_file_content("acme", "widgets", "a.py")
        platform.get_file_content("acme", "widgets", "b.py", ref="abc")

        assert repository.get_contents.call_args_list[0].args == ("a.py",)
        assert repository.get_contents.call_args_list[0].kwargs == {}
        assert repository.get_contents.call_args_list[1].kwargs == {"ref": "abc"}

    def test_repository_looked_up_once(self):
        platform, client, _ = self._platform()

        platform.get_file_content("acme", "widgets", "a.py")
        platform.create_comment("acme", "widgets", 7, "hi")

        client.get_repo.assert_called_once_with("acme/widgets")

    def test_list_comments_flags_bot(self):
        platform, _, repository = self._platform()
        repository.get_issue.return_value.get_comments.return_value = [
            types.SimpleNamespace(user=types.SimpleNamespace(login="alice"), body="why?"),
            types.SimpleNamespace(user=types.SimpleNamespace(login="pga-github-app"), body="because"),
            types.SimpleNamespace(user=None, body="ghost"),
        ]

        result = get_comments(platform, "acme", "widgets", 7)

        assert [(c.author, c.is_from_review_bot) for c in result] == [
            ("alice", False),
            ("pga-github-app", True),
            (None, False),
        ]

    def test_create_comment(self):
        platform, _, repository = self._platform()

        platform.create_comment("acme", "widgets", 7, "body")

        repository.get_issue.assert_called_once_with(7)
        repository.get_issue.return_value.create_comment.assert_called_once_with("body")
