"""Pydantic models for the ``vidctl.toml`` sections, with code-baked defaults.

Sparse TOML contract: defaults live here, vidctl.toml only contains overrides.

Example ``vidctl.toml``::

    [catalog]
    content_dir = "manuscript"
    read_workers = 8

    [plugins]
    entry_points = false
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from vidctl.domain.item import DEFAULT_DATE_FORMAT


class CatalogConfig(BaseModel):
    """[catalog] section: where documents, scripts and the index live."""

    model_config = {"frozen": True}

    content_dir: str = "manuscript"
    index_file: str = "index.yaml"
    script_extension: str = "md"
    date_format: str = DEFAULT_DATE_FORMAT
    # Thread pool size for catalog-wide reads; 1 reads serially.
    read_workers: int = Field(default=4, ge=1)


class PluginsConfig(BaseModel):
    """[plugins] section: where notification and upload plugins come from."""

    model_config = {"frozen": True}

    local_dir: str = ".vidctl/plugins"
    entry_points: bool = True
