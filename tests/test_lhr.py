"""Result model tests: cloning, parsing, preparation."""

from __future__ import annotations

import json
from typing import Any

import pytest

from reportmux.errors import ResultError
from reportmux.lhr import (
    PLUGIN_CATEGORY_ID,
    add_plugin_category,
    clone_result,
    load_result,
    parse_result,
    prepare_report_result,
)

pytestmark = pytest.mark.unit


def test_clone_shares_no_containers(lhr: dict[str, Any]) -> None:
    clone = clone_result(lhr)

    clone["categories"]["performance"]["auditRefs"].clear()
    clone["audits"]["first-contentful-paint"]["warnings"].append("x")

    assert len(lhr["categories"]["performance"]["auditRefs"]) == 4
    assert lhr["audits"]["first-contentful-paint"]["warnings"] == []


def test_parse_accepts_json_text(lhr: dict[str, Any]) -> None:
    assert parse_result(json.dumps(lhr)) == lhr


def test_parse_rejects_invalid_json() -> None:
    with pytest.raises(ResultError, match="not valid JSON") as exc:
        parse_result("{nope")
    assert exc.value.hint is not None


@pytest.mark.parametrize("raw", ["[]", "42", '"text"'])
def test_parse_rejects_non_objects(raw: str) -> None:
    with pytest.raises(ResultError, match="JSON object"):
        parse_result(raw)


@pytest.mark.parametrize("missing", ["categories", "audits"])
def test_parse_rejects_missing_sections(lhr: dict[str, Any], missing: str) -> None:
    del lhr[missing]
    with pytest.raises(ResultError, match=missing):
        parse_result(lhr)


def test_load_result_reads_file(tmp_path, lhr: dict[str, Any]) -> None:
    path = tmp_path / "sample.json"
    path.write_text(json.dumps(lhr), encoding="utf-8")

    assert load_result(path) == lhr


def test_load_result_missing_file(tmp_path) -> None:
    with pytest.raises(ResultError, match="not found"):
        load_result(tmp_path / "missing.json")


def test_prepare_attaches_audit_results(lhr: dict[str, Any]) -> None:
    prepared = prepare_report_result(lhr)

    refs = prepared["categories"]["performance"]["auditRefs"]
    assert all("result" in ref for ref in refs)
    assert refs[0]["result"]["title"] == "First Contentful Paint"
    assert "result" not in lhr["categories"]["performance"]["auditRefs"][0]


def test_prepare_rejects_unresolved_refs(lhr: dict[str, Any]) -> None:
    lhr["categories"]["seo"]["auditRefs"].append({"id": "no-such-audit", "weight": 1})

    with pytest.raises(ResultError, match="no-such-audit"):
        prepare_report_result(lhr)


def test_add_plugin_category_returns_copy(lhr: dict[str, Any]) -> None:
    with_plugin = add_plugin_category(lhr)

    assert with_plugin["categories"][PLUGIN_CATEGORY_ID] == {
        "id": PLUGIN_CATEGORY_ID,
        "title": "Plugin",
        "score": 0.5,
        "auditRefs": [],
    }
    assert PLUGIN_CATEGORY_ID not in lhr["categories"]


def test_parse_rejects_undecodable_bytes() -> None:
    with pytest.raises(ResultError, match="not valid UTF-8") as exc:
        parse_result(b'{"categories": {}, "audits": {"\xff": 1}}')
    assert exc.value.hint is not None
    assert "byte offset" in exc.value.hint


def test_load_result_rejects_undecodable_file(tmp_path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"categories": {}, "audits": {"\xff": 1}}')

    with pytest.raises(ResultError, match="not valid UTF-8"):
        load_result(path)
