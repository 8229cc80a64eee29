"""Validation of raw API responses against the page schema."""
from __future__ import annotations

import json
from typing import Type

from pydantic import BaseModel, ValidationError

from ..schemas.patients import PatientPage

# errors that make a response unusable but are worth asking for again
RETRYABLE_PARSE_ERRORS = (json.JSONDecodeError, ValidationError)


class ResponseParser:
    """Validate JSON payloads against a pydantic schema."""

    def __init__(self, schema: Type[BaseModel] = PatientPage):
        self.schema = schema

    def parse(self, text: str) -> BaseModel:
        """Parse raw response text and validate it.

        Raises ``json.JSONDecodeError`` or ``pydantic.ValidationError``.
        """

        data = json.loads(text)
        return self.schema.model_validate(data)


parser = ResponseParser()
