"""CLI tests — schema creation, demo reset, teacher insertion.

Each test points the CLI at a throwaway SQLite file.
"""

import pytest
from click.testing import CliRunner

from yogastudio.cli.main import cli


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"


@pytest.fixture
def runner():
    return CliRunner()


def test_init_db(runner, db_url):
    result = runner.invoke(cli, ["init-db", "--database-url", db_url])
    assert result.exit_code == 0, result.output
    assert "schema created" in result.output


def test_reset_db_creates_demo_user(runner, db_url):
    runner.invoke(cli, ["init-db", "--database-url", db_url])

    result = runner.invoke(cli, ["reset-db", "--database-url", db_url])
    assert result.exit_code == 0, result.output
    assert "yoga@studio.com" in result.output

    # Resetting again replaces the demo user instead of colliding with it
    result = runner.invoke(cli, ["reset-db", "--database-url", db_url])
    assert result.exit_code == 0, result.output


def test_add_teacher(runner, db_url):
    runner.invoke(cli, ["init-db", "--database-url", db_url])

    result = runner.invoke(
        cli, ["add-teacher", "Margot", "DELAHAYE", "--database-url", db_url]
    )
    assert result.exit_code == 0, result.output
    assert "Margot DELAHAYE (id=1)" in result.output
