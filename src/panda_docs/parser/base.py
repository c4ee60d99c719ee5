"""Data models for composed API documents.

The aggregator builds these once per pass; the document tree and the
endpoint table share the same Endpoint objects.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Endpoint(BaseModel):
    """A single API endpoint with every reference resolved."""

    model_config = ConfigDict(frozen=True)

    name: str
    desc: str = ""
    url: str
    method: str = "GET"  # GET / POST / PUT / DELETE / PATCH
    auth: bool = False
    body_mode: str = "json"  # json / form-data / raw ...
    body: Any = None
    query: Any = None
    response: Any = None
    test_data: Any = None


class DocumentSummary(BaseModel):
    """One API document: its metadata and endpoints in declaration order."""

    model_config = ConfigDict(frozen=True)

    name: str
    desc: str = ""
    order: int = 0
    filename: str
    apis: list[Endpoint] = []


class ProjectSettings(BaseModel):
    """Project-wide settings read from ``_settings.json`` and ``README.md``."""

    model_config = ConfigDict(frozen=True)

    read_me: str
    project_name: str
    project_desc: str = ""
    global_value: Any = None  # only global_value["api"] feeds endpoint defaults
