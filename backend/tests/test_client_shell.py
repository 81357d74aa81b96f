# File: backend/tests/test_client_shell.py
# Version: v0.1.0
"""
Tests for the HTTP client and the catalog shell state machine.

The happy paths run against the real app (TestClient is an httpx.Client);
failure paths use httpx.MockTransport.
"""
import httpx
import pytest

from backend.app.client.api_client import ApiError, PathogenApiClient
from backend.app.client.shell import ADD_FAILED, LOAD_FAILED, SEARCH_FAILED, CatalogShell, ShellStatus


def _failing_client(status=500, body=None):
    body = body if body is not None else {"error": "upstream unavailable"}

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body)

    return httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test")


@pytest.fixture
def api(client):
    return PathogenApiClient(client=client)


def test_client_round_trip(api, make_payload):
    created = api.create_pathogen(make_payload())
    assert created.id
    assert [p.name for p in api.list_pathogens()] == ["Escherichia coli"]
    assert api.search_pathogens("COLI")[0].id == created.id


def test_client_blank_search_uses_list(api, make_payload):
    api.create_pathogen(make_payload())
    assert len(api.search_pathogens("   ")) == 1


def test_client_surfaces_server_error_text(api, make_payload):
    payload = make_payload()
    del payload["strain"]
    with pytest.raises(ApiError) as excinfo:
        api.create_pathogen(payload)
    assert excinfo.value.status_code == 400
    assert "strain" in excinfo.value.message


def test_client_transport_error_becomes_api_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = PathogenApiClient(client=httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test"))
    with pytest.raises(ApiError) as excinfo:
        api.list_pathogens()
    assert excinfo.value.status_code == 0


def test_shell_mount_reaches_ready(api, make_payload):
    api.create_pathogen(make_payload())
    shell = CatalogShell(api)
    assert shell.status is ShellStatus.LOADING

    assert shell.mount() is ShellStatus.READY
    assert shell.error is None
    assert [p.name for p in shell.pathogens] == ["Escherichia coli"]


def test_shell_search_replaces_list(api, make_payload):
    api.create_pathogen(make_payload("Escherichia coli"))
    api.create_pathogen(make_payload("Staphylococcus aureus"))
    shell = CatalogShell(api)
    shell.mount()
    assert len(shell.pathogens) == 2

    assert shell.search("staph") is ShellStatus.READY
    assert [p.name for p in shell.pathogens] == ["Staphylococcus aureus"]


def test_shell_load_failure_keeps_stale_list():
    shell = CatalogShell(PathogenApiClient(client=_failing_client()))
    sentinel = ["stale"]
    shell.pathogens = sentinel

    assert shell.load() is ShellStatus.ERROR
    assert shell.error == LOAD_FAILED
    assert shell.pathogens is sentinel

    assert shell.search("coli") is ShellStatus.ERROR
    assert shell.error == SEARCH_FAILED


def test_shell_add_form_success_hides_form_and_reloads(api, make_payload):
    shell = CatalogShell(api)
    shell.mount()
    shell.open_add_form()
    assert shell.show_add_form

    created = shell.submit_add_form(make_payload())
    assert created is not None
    assert shell.show_add_form is False
    assert shell.draft is None
    assert shell.status is ShellStatus.READY
    assert [p.id for p in shell.pathogens] == [created.id]


def test_shell_add_form_failure_keeps_form_and_draft(api, make_payload):
    shell = CatalogShell(api)
    shell.mount()
    shell.open_add_form()
    payload = make_payload()
    del payload["targets"]

    assert shell.submit_add_form(payload) is None
    assert shell.alert == ADD_FAILED
    assert shell.show_add_form is True
    assert shell.draft is payload
    assert shell.status is ShellStatus.READY
    assert shell.pathogens == []


def test_shell_cancel_add_form(api):
    shell = CatalogShell(api)
    shell.open_add_form()
    shell.cancel_add_form()
    assert shell.show_add_form is False
