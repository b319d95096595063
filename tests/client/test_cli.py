from __future__ import annotations

import pytest
from httpx import ASGITransport

from equipment_inventory.client.cli import (
    EXIT_FAILED,
    EXIT_LOGIN_REQUIRED,
    EXIT_OK,
    build_parser,
    run,
)
from equipment_inventory.core.exceptions import InfrastructureError
from tests.conftest import ADMIN_PASSWORD, BASE_URL


@pytest.fixture
def cli(app, tmp_path):
    state = tmp_path / "client.json"

    async def invoke(*argv: str) -> int:
        args = build_parser().parse_args(["--url", BASE_URL, "--state", str(state), *argv])
        return await run(args, transport=ASGITransport(app=app))

    return invoke


async def test_list_renders_rows_and_flags_shortage(cli, equipment_repo, capsys):
    equipment_repo.seed(name="Basketball", quantity=5, required_quantity=10)
    equipment_repo.seed(name="Cone", quantity=30, required_quantity=10)

    assert await cli("list", "--shortage") == EXIT_OK

    out = capsys.readouterr().out
    assert "Basketball" in out
    assert "Cone" not in out
    assert "10!" in out


async def test_list_empty(cli, capsys):
    assert await cli("list") == EXIT_OK
    assert "No equipment found." in capsys.readouterr().out


async def test_add_requires_login(cli, equipment_repo, capsys):
    assert await cli("add", "Cone", "--quantity", "3") == EXIT_LOGIN_REQUIRED
    assert "login" in capsys.readouterr().err
    assert equipment_repo.writes == []


async def test_login_then_add_and_decrement(cli, equipment_repo, capsys):
    assert await cli("login", ADMIN_PASSWORD) == EXIT_OK
    assert await cli("add", "Cone", "--quantity", "3", "--required", "5") == EXIT_OK

    (row,) = equipment_repo.rows.values()
    assert (row.name, row.quantity, row.required_quantity) == ("Cone", 3, 5)

    assert await cli("dec", row.id, "--by", "2") == EXIT_OK
    assert equipment_repo.rows[row.id].quantity == 1
    assert "[ok] Equipment added!" in capsys.readouterr().err


async def test_edit_unknown_id_fails(cli):
    await cli("login", ADMIN_PASSWORD)
    assert await cli("edit", "missing", "--name", "X") == EXIT_FAILED


async def test_wrong_password_reports_error(cli, equipment_repo, capsys):
    row = equipment_repo.seed(name="Hoop", quantity=2)
    await cli("login", "wrong")

    assert await cli("delete", row.id) == EXIT_FAILED
    assert "[error] Incorrect admin password" in capsys.readouterr().err
    assert row.id in equipment_repo.rows


async def test_logout_returns_to_viewer_mode(cli, equipment_repo):
    row = equipment_repo.seed(name="Hoop", quantity=2)
    await cli("login", ADMIN_PASSWORD)
    assert await cli("logout") == EXIT_OK

    assert await cli("inc", row.id) == EXIT_LOGIN_REQUIRED
    assert equipment_repo.rows[row.id].quantity == 2


async def test_list_fails_when_server_errors(cli, equipment_repo, capsys):
    equipment_repo.seed(name="Hoop", quantity=2)
    equipment_repo.fail(InfrastructureError("db down"), on={"list_all"})

    assert await cli("list") == EXIT_FAILED

    captured = capsys.readouterr()
    assert "No equipment found." not in captured.out
    assert "Failed to load equipment" in captured.err


async def test_inc_fails_when_server_errors(cli, equipment_repo):
    row = equipment_repo.seed(name="Hoop", quantity=2)
    await cli("login", ADMIN_PASSWORD)
    equipment_repo.fail(InfrastructureError("db down"), on={"list_all"})

    assert await cli("inc", row.id) == EXIT_FAILED
    assert equipment_repo.rows[row.id].quantity == 2
