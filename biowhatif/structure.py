"""RCSB structure-file proxy, so the browser never fetches cross-origin."""

import logging
import re

import httpx

from biowhatif.config import Settings
from biowhatif.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

_NOT_ALNUM = re.compile(r"[^A-Z0-9]")
MIN_ID_LENGTH = 4


def sanitize_structure_id(raw_id: str) -> str:
    safe_id = _NOT_ALNUM.sub("", (raw_id or "").upper())
    if len(safe_id) < MIN_ID_LENGTH:
        raise ValidationError("Invalid PDB ID")
    return safe_id


class StructureProxy:
    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    def url_for(self, pdb_id: str) -> str:
        return self.settings.structure_url_template.format(pdb_id=pdb_id)

    async def fetch(self, raw_id: str) -> str:
        pdb_id = sanitize_structure_id(raw_id)
        url = self.url_for(pdb_id)
        logger.info("Fetching structure %s from %s", pdb_id, url)

        try:
            async with httpx.AsyncClient(
                transport=self.transport, timeout=self.settings.structure_timeout
            ) as client:
                response = await client.get(url, headers={"Accept": "text/plain"})
        except httpx.HTTPError as e:
            logger.error("Structure fetch for %s failed: %s", pdb_id, e)
            raise UpstreamError("Failed to load structure") from e

        if not response.is_success:
            logger.warning("RCSB returned %d for %s", response.status_code, pdb_id)
            raise UpstreamError(
                f"Failed to fetch PDB: {response.status_code}", status_code=response.status_code
            )
        return response.text
