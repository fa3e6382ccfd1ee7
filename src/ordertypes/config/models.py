"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ordertypes.toml only contains
overrides. A fresh project needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    db_dir: str = ".ordertypes"
    db_name: str = "ordertypes.db"


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = 120
    color: bool = True

