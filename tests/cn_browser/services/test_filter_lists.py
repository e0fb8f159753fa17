import pytest
import requests

from cn_browser.core.exceptions import FilterListError
from cn_browser.services.filter_lists import (
    UNLIMITED,
    FilterList,
    FilterListClient,
    filter_lists_matching,
    parse_filter_list_data,
)


class _FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self._payload = payload
        self.status_code = status_code
        self._bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._payload


class _FakeSession:
    """Records GET calls and replies with a canned response."""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _raw_list(list_id=1, name="Kinases", data="GENE1\nGENE2", category="Signalling"):
    return {"id": list_id, "name": name, "data": data, "default": True, "category": category}


# ---------------------------------------------------------------------------
# List text parsing
# ---------------------------------------------------------------------------
def test_parse_filter_list_data_splits_lines_commas_and_semicolons():
    assert parse_filter_list_data("GENE1\nGENE2,GENE3;GENE4\n\n") == ["GENE1", "GENE2", "GENE3", "GENE4"]


def test_parse_filter_list_data_trims_and_handles_blank_input():
    assert parse_filter_list_data("  TP53 ; ,ACTB\r\n GAPDH ") == ["TP53", "ACTB", "GAPDH"]
    assert parse_filter_list_data("") == []
    assert parse_filter_list_data(None) == []
    assert parse_filter_list_data("\n ;, \n") == []


def test_filter_list_from_dict_and_identifiers():
    fl = FilterList.from_dict(_raw_list(data="A;B\nC"))

    assert fl.id == 1
    assert fl.default is True
    assert fl.category == "Signalling"
    assert fl.identifiers == ["A", "B", "C"]


def test_filter_list_from_dict_tolerates_missing_fields():
    fl = FilterList.from_dict({"id": "7", "data": None})

    assert fl.id == 7
    assert fl.name == ""
    assert fl.identifiers == []
    assert fl.category is None


def test_filter_lists_matching_by_category_and_name():
    lists = [
        FilterList(1, "Kinases", "", category="Signalling"),
        FilterList(2, "Phosphatases", "", category="Signalling"),
        FilterList(3, "Ribosome", "", category="Translation"),
    ]

    assert [fl.id for fl in filter_lists_matching(lists, category="Signalling")] == [1, 2]
    assert [fl.id for fl in filter_lists_matching(lists, query="PHOS")] == [2]
    assert [fl.id for fl in filter_lists_matching(lists)] == [1, 2, 3]


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------
def test_get_filter_lists_sends_params_and_parses_results():
    session = _FakeSession(_FakeResponse({"count": 1, "results": [_raw_list()]}))
    client = FilterListClient("https://lists.example.org/", session=session)

    lists = client.get_filter_lists(category="Signalling")

    assert [fl.name for fl in lists] == ["Kinases"]
    call = session.calls[0]
    assert call["url"] == "https://lists.example.org/data_filter_list/"
    assert call["params"] == {"category": "Signalling", "limit": str(UNLIMITED)}


def test_get_filter_lists_exact_filters_and_limit():
    session = _FakeSession(_FakeResponse({"results": []}))
    client = FilterListClient("https://lists.example.org", session=session)

    assert client.get_filter_lists(name_exact="Kinases", category_exact="Signalling", limit=5) == []
    assert session.calls[0]["params"] == {
        "name_exact": "Kinases",
        "category_exact": "Signalling",
        "limit": "5",
    }


def test_get_filter_list_and_categories():
    session = _FakeSession(_FakeResponse(_raw_list(list_id=42)))
    client = FilterListClient("https://lists.example.org", session=session)

    assert client.get_filter_list(42).id == 42
    assert session.calls[0]["url"] == "https://lists.example.org/data_filter_list/42/"

    session.response = _FakeResponse(["Signalling", "Translation"])
    assert client.get_all_categories() == ["Signalling", "Translation"]
    assert session.calls[1]["url"].endswith("/data_filter_list/get_all_category/")


@pytest.mark.parametrize(
    "response",
    [
        _FakeResponse(status_code=500),
        _FakeResponse(bad_json=True),
        requests.ConnectionError("offline"),
    ],
)
def test_request_failures_raise_filter_list_error(response):
    client = FilterListClient("https://lists.example.org", session=_FakeSession(response))

    with pytest.raises(FilterListError):
        client.get_filter_lists()


def test_unexpected_payload_shapes_raise_filter_list_error():
    client = FilterListClient("https://lists.example.org", session=_FakeSession(_FakeResponse([1, 2])))
    with pytest.raises(FilterListError):
        client.get_filter_lists()

    client = FilterListClient("https://lists.example.org", session=_FakeSession(_FakeResponse({"a": 1})))
    with pytest.raises(FilterListError):
        client.get_all_categories()
