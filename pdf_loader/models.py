"""
Data Models for PDF Loading

Defines:
1. LoaderConfig - Options for opening a PDF (currently the password)
2. SingleUsePassword - A credential that can be read exactly once
3. LoadResponse - HTTP response of the loader service

Pages are returned as chunking.TextUnit so loader output can be fed
straight into the token splitter.
"""

from typing import Optional

from pydantic import BaseModel, Field, SecretStr

from chunking.models import TextUnit

from .exceptions import CredentialReuseError


class LoaderConfig(BaseModel):
    """Configuration for the PDF loader."""
    password: Optional[SecretStr] = Field(
        None,
        description="User password for encrypted PDFs (used at most once)",
    )


class SingleUsePassword:
    """
    A password that is invalidated on first read.

    Reading it a second time raises CredentialReuseError instead of
    handing out an empty string.
    """

    def __init__(self, password: str):
        self._password: Optional[str] = password
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def consume(self) -> str:
        if self._consumed:
            raise CredentialReuseError()
        password = self._password
        self._password = None
        self._consumed = True
        return password

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "unused"
        return f"SingleUsePassword(<{state}>)"


class LoadResponse(BaseModel):
    units: list[TextUnit] = Field(default_factory=list)
    total_units: int = 0
    total_pages: int = 0
