"""Pydantic models describing load-order dump files.

A dump lists plugins in load order, each with its decoded cell records::

    {"plugins": [{"name": "Update.esm",
                  "cells": [{"formKey": "000D62:Skyrim.esm",
                             "editorId": "WhiterunExterior01",
                             "water": "000018:Skyrim.esm",
                             "flags": 0}]}]}

Cell entries are kept raw at document level and validated one at a time, so a
malformed record only affects the records that reference it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class LoadOrderBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CellPayload(LoadOrderBaseModel):
    form_key: str = Field(alias="formKey")
    editor_id: str | None = Field(default=None, alias="editorId")
    water: str | None = None
    flags: int = Field(default=0, ge=0)
    attributes: dict[str, Any] = Field(default_factory=dict[str, Any])

    _normalize_editor_id = field_validator("editor_id", mode="before")(_blank_to_none)
    _normalize_water = field_validator("water", mode="before")(_blank_to_none)


class PluginPayload(LoadOrderBaseModel):
    name: str
    cells: list[Any] = Field(default_factory=list[Any])


class LoadOrderDocument(LoadOrderBaseModel):
    plugins: list[PluginPayload] = Field(default_factory=list[PluginPayload])
