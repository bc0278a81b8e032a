import pytest
import requests
from unittest.mock import MagicMock, patch

from core.config import Settings
from loaders.local_store import SQLiteStore
from loaders.store import StoreError, SupabaseStore, create_store, validate_remote_control

ROW = {
    "id": "9f1c",
    "name": "Lake Balkhash",
    "region": "Karaganda Region",
    "resource_type": "lake",
    "water_type": "non-fresh",
    "fauna": True,
    "passport_date": "2012-05-14",
    "technical_condition": 3,
    "latitude": 46.54,
    "longitude": 74.88,
    "pdf_url": None,
    "priority": 21,
    "created_at": "2024-01-01T00:00:00+00:00",
    "updated_at": "2024-01-01T00:00:00+00:00",
}


@pytest.fixture
def mock_store():
    with patch('requests.Session') as mock_session:
        store = SupabaseStore("https://demo.supabase.co/", "anon-key")
        store.session = mock_session.return_value
        yield store


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda seconds: None)


def ok_response(body):
    response = MagicMock()
    response.content = b"[]" if body is not None else b""
    response.json.return_value = body
    return response


def test_fetch_water_objects(mock_store):
    mock_store.session.request.return_value = ok_response([ROW])

    objects = mock_store.fetch_water_objects()

    assert len(objects) == 1
    assert objects[0].name == "Lake Balkhash"
    assert objects[0].technical_condition == 3
    method, url = mock_store.session.request.call_args.args
    assert method == "GET"
    assert url == "https://demo.supabase.co/rest/v1/water_objects"
    assert mock_store.session.request.call_args.kwargs["params"] == {"select": "*"}


def test_insert_sends_only_writable_columns(mock_store):
    mock_store.session.request.return_value = ok_response([ROW])

    obj = mock_store.insert_water_object({"name": "Lake Balkhash", "region": "Karaganda Region", "id": "x", "bogus": 1})

    assert obj.id == "9f1c"
    kwargs = mock_store.session.request.call_args.kwargs
    assert kwargs["json"] == [{"name": "Lake Balkhash", "region": "Karaganda Region"}]


def test_update_filters_by_id(mock_store):
    mock_store.session.request.return_value = ok_response([dict(ROW, priority=25)])

    obj = mock_store.update_water_object("9f1c", {"priority": 25})

    assert obj.priority == 25
    assert mock_store.session.request.call_args.args[0] == "PATCH"
    assert mock_store.session.request.call_args.kwargs["params"] == {"id": "eq.9f1c"}


def test_update_missing_row_raises(mock_store):
    mock_store.session.request.return_value = ok_response([])
    with pytest.raises(StoreError):
        mock_store.update_water_object("missing", {"priority": 1})


def test_delete_with_empty_body(mock_store):
    mock_store.session.request.return_value = ok_response(None)
    mock_store.delete_water_object("9f1c")
    assert mock_store.session.request.call_args.args[0] == "DELETE"


def test_find_user(mock_store):
    mock_store.session.request.return_value = ok_response([{"id": "u1", "login": "expert", "role": "expert"}])
    user = mock_store.find_user("expert")
    assert user.is_expert
    assert mock_store.session.request.call_args.kwargs["params"]["login"] == "eq.expert"

    mock_store.session.request.return_value = ok_response([])
    assert mock_store.find_user("ghost") is None


def test_http_error_becomes_store_error(mock_store):
    error_response = MagicMock()
    error_response.status_code = 401
    error_response.json.return_value = {"message": "Invalid API key"}
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError(response=error_response)
    mock_store.session.request.return_value = response

    with pytest.raises(StoreError, match="Invalid API key"):
        mock_store.fetch_users()


def test_http_error_without_message(mock_store):
    error_response = MagicMock()
    error_response.status_code = 503
    error_response.json.side_effect = ValueError("not json")
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError(response=error_response)
    mock_store.session.request.return_value = response

    with pytest.raises(StoreError, match="API error: 503"):
        mock_store.fetch_hardware()


def test_connection_errors_are_retried(mock_store, no_sleep):
    mock_store.session.request.side_effect = requests.ConnectionError("unreachable")

    with pytest.raises(StoreError, match="unreachable"):
        mock_store.fetch_water_objects()
    assert mock_store.session.request.call_count == 3


def test_remote_control_validated_before_request(mock_store):
    with pytest.raises(ValueError):
        mock_store.set_remote_control(2)
    mock_store.session.request.assert_not_called()


def test_validate_remote_control():
    assert [validate_remote_control(v) for v in (1, 0, -1)] == [1, 0, -1]
    with pytest.raises(ValueError):
        validate_remote_control(5)


def test_create_store_selects_backend(tmp_path):
    local = create_store(Settings(store="supabase", db_path=str(tmp_path / "x.db")))
    assert isinstance(local, SQLiteStore)

    with patch('requests.Session'):
        remote = create_store(Settings(store="supabase", supabase_url="https://a.supabase.co", supabase_key="k"))
    assert isinstance(remote, SupabaseStore)
    assert remote.base_url == "https://a.supabase.co/rest/v1"
