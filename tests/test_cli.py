"""Tests for the command-line entry point (crudclap.cli)."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import create_engine, inspect

from crudclap.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "CRUDCLAP_NAMESPACE",
        "CRUDCLAP_TARGET_DIR",
        "CRUDCLAP_TEMPLATE",
        "CRUDCLAP_ROUTE_PREFIX",
        "CRUDCLAP_ROUTE_MIDDLEWARE",
        "CRUDCLAP_VIEW_EXTENDS",
        "CRUDCLAP_DATABASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_args(sqlite_url: str, target_dir: Path) -> list[str]:
    return ["--database-url", sqlite_url, "--target-dir", str(target_dir)]


# ---------------------------------------------------------------------------
# Successful runs
# ---------------------------------------------------------------------------


class TestGenerate:
    @pytest.mark.unit
    def test_generates_module_for_table(self, base_args, target_dir, capsys):
        main(["--table", "blog_posts", *base_args])

        module = target_dir / "BlogPost"
        model = (module / "Models" / "BlogPost.php").read_text(encoding="utf-8")
        assert "class BlogPost extends Model" in model
        assert "protected $table = 'blog_posts';" in model
        assert (module / "Controllers" / "BlogPostController.php").exists()
        assert "generated" in capsys.readouterr().out

    @pytest.mark.unit
    def test_prompts_for_table_when_omitted(self, base_args, target_dir):
        prompt = MagicMock()
        prompt.ask.return_value = "tags"
        with patch("crudclap.cli.Prompt", prompt):
            main(base_args)

        assert prompt.ask.call_args.kwargs["choices"] == ["blog_posts", "tags"]
        assert (target_dir / "Tag" / "Models" / "Tag.php").exists()

    @pytest.mark.unit
    def test_config_file(self, sqlite_url, tmp_path, target_dir):
        config_path = tmp_path / "crudclap.json"
        config_path.write_text(
            json.dumps({
                "namespace": "App\\Modules",
                "target_dir": str(target_dir),
                "database_url": sqlite_url,
                "routes": {"prefix": "admin", "middleware": ["web"]},
            }),
            encoding="utf-8",
        )
        main(["--table", "blog_posts", "--config", str(config_path)])

        routes = (target_dir / "BlogPost" / "routes" / "web.php").read_text(encoding="utf-8")
        assert "use App\\Modules\\BlogPost\\Controllers\\BlogPostController;" in routes
        assert "'prefix' => 'admin'," in routes
        assert "'middleware' => ['web']," in routes

    @pytest.mark.unit
    def test_env_configuration(self, sqlite_url, target_dir, monkeypatch):
        monkeypatch.setenv("CRUDCLAP_DATABASE_URL", sqlite_url)
        monkeypatch.setenv("CRUDCLAP_TARGET_DIR", str(target_dir))
        monkeypatch.setenv("CRUDCLAP_NAMESPACE", "Acme")

        main(["--table", "tags"])

        model = (target_dir / "Tag" / "Models" / "Tag.php").read_text(encoding="utf-8")
        assert "namespace Acme\\Tag\\Models;" in model


# ---------------------------------------------------------------------------
# Existing module
# ---------------------------------------------------------------------------


class TestExistingModule:
    @pytest.fixture
    def existing(self, target_dir: Path) -> Path:
        module = target_dir / "BlogPost"
        module.mkdir(parents=True)
        (module / "custom.php").write_text("hand written", encoding="utf-8")
        return module

    @pytest.mark.unit
    def test_declined_overwrite_keeps_files(self, base_args, existing, capsys):
        with patch("crudclap.cli._confirm", return_value=False) as confirm:
            main(["--table", "blog_posts", *base_args])

        confirm.assert_called_once()
        assert [p.name for p in existing.iterdir()] == ["custom.php"]
        assert "cancelled" in capsys.readouterr().out

    @pytest.mark.unit
    def test_confirmed_overwrite(self, base_args, existing):
        with patch("crudclap.cli._confirm", return_value=True):
            main(["--table", "blog_posts", *base_args])

        assert not (existing / "custom.php").exists()
        assert (existing / "Models" / "BlogPost.php").exists()

    @pytest.mark.unit
    def test_force_does_not_prompt(self, base_args, existing):
        with patch("crudclap.cli._confirm") as confirm:
            main(["--table", "blog_posts", "--force", *base_args])

        confirm.assert_not_called()
        assert not (existing / "custom.php").exists()


# ---------------------------------------------------------------------------
# Fatal errors
# ---------------------------------------------------------------------------


class TestFatalErrors:
    @pytest.mark.unit
    def test_unknown_table(self, base_args, target_dir):
        with pytest.raises(SystemExit) as exc_info:
            main(["--table", "missing", *base_args])
        assert exc_info.value.code == 1
        assert not target_dir.exists()

    @pytest.mark.unit
    def test_unknown_template(self, base_args, target_dir):
        with pytest.raises(SystemExit) as exc_info:
            main(["--table", "blog_posts", "--template", "nope", *base_args])
        assert exc_info.value.code == 1
        assert not target_dir.exists()

    @pytest.mark.unit
    def test_database_without_tables(self, tmp_path, target_dir):
        url = f"sqlite:///{tmp_path / 'empty.sqlite'}"
        engine = create_engine(url)
        assert inspect(engine).get_table_names() == []
        engine.dispose()

        with pytest.raises(SystemExit) as exc_info:
            main(["--database-url", url, "--target-dir", str(target_dir)])
        assert exc_info.value.code == 1

    @pytest.mark.unit
    def test_missing_config_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--table", "blog_posts", "--config", str(tmp_path / "nope.json")])
        assert exc_info.value.code == 1

    @pytest.mark.unit
    def test_invalid_config_file(self, tmp_path):
        config_path = tmp_path / "crudclap.json"
        config_path.write_text(json.dumps({"default": "unknown"}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["--table", "blog_posts", "--config", str(config_path)])
        assert exc_info.value.code == 1

    @pytest.mark.unit
    def test_malformed_database_url(self, target_dir):
        with pytest.raises(SystemExit) as exc_info:
            main(["--table", "blog_posts", "--database-url", "not a url",
                  "--target-dir", str(target_dir)])
        assert exc_info.value.code == 1
        assert not target_dir.exists()
