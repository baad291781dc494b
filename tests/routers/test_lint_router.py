from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import dependencies as deps
from app.routers import lint
from app.services.post_validator import PostValidator
from app.settings import Settings


def make_app(validator):
    app = FastAPI()
    app.dependency_overrides[deps.get_post_validator] = lambda: validator
    app.include_router(lint.router)
    return app


def test_lint_reports_issues_for_posts_dir(write_post, monkeypatch):
    write_post("2015-01-01-good.md", "---\ntitle: Good\ndate: 2015-01-01\n---\nbody\n")
    write_post("2015-01-02-bad.md", "---\ntitle: Bad\n---\nbody\n")
    monkeypatch.setattr(lint, "settings", Settings(POSTS_DIR=str(write_post.posts_dir)))
    client = TestClient(make_app(PostValidator()))

    res = client.get("/lint")

    assert res.status_code == 200
    body = res.json()
    assert body["checked"] == 2
    assert body["errors"] == 1
    assert body["ok"] is False
    assert body["issues"][0]["rule"] == "date-missing"
    assert body["issues"][0]["path"].endswith("2015-01-02-bad.md")


def test_lint_returns_500_on_unexpected_error():
    class BoomValidator:
        def validate_paths(self, paths):
            raise RuntimeError("boom")

    client = TestClient(make_app(BoomValidator()))

    res = client.get("/lint")
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to validate posts"
