# -*- coding: utf-8 -*-
"""
    logsink.models.base
    ~~~~~~~~~~~~~~~~~~~

    Custom Pydantic base model.
"""

from pydantic import BaseModel, ConfigDict


class CustomBaseModel(BaseModel):
    """Unknown keys (e.g. options of another adapter in a shared config) are ignored."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)
