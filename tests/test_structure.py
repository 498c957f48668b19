"""Tests for the RCSB structure proxy."""

import asyncio

import httpx
import pytest

from biowhatif.config import Settings
from biowhatif.errors import UpstreamError, ValidationError
from biowhatif.structure import StructureProxy, sanitize_structure_id


class TestSanitizeStructureId:
    def test_uppercases_and_strips(self):
        assert sanitize_structure_id("2hbs!!") == "2HBS"
        assert sanitize_structure_id(" 1a/3n ") == "1A3N"

    @pytest.mark.parametrize("raw_id", ["a", "", "2h-b", "!!!!"])
    def test_short_ids_are_rejected(self, raw_id):
        with pytest.raises(ValidationError, match="Invalid PDB ID"):
            sanitize_structure_id(raw_id)


class TestStructureProxy:
    def _proxy(self, handler):
        return StructureProxy(Settings(), transport=httpx.MockTransport(handler))

    def test_returns_body_verbatim(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="ATOM  \r\nEND")

        text = asyncio.run(self._proxy(handler).fetch("2hbs"))
        assert text == "ATOM  \r\nEND"
        assert str(seen[0].url) == "https://files.rcsb.org/view/2HBS.pdb"
        assert seen[0].headers["accept"] == "text/plain"

    def test_non_success_carries_upstream_status(self):
        proxy = self._proxy(lambda request: httpx.Response(503))
        with pytest.raises(UpstreamError) as exc_info:
            asyncio.run(proxy.fetch("2HBS"))
        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "Failed to fetch PDB: 503"

    def test_network_error_is_upstream_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamError) as exc_info:
            asyncio.run(self._proxy(handler).fetch("2HBS"))
        assert exc_info.value.status_code == 500

    def test_url_template_is_configurable(self):
        proxy = StructureProxy(Settings(structure_url_template="https://mirror.example/{pdb_id}.txt"))
        assert proxy.url_for("4HHB") == "https://mirror.example/4HHB.txt"
