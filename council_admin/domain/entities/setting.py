"""
Setting Entity

Generic key/value store for runtime configuration managed from the
admin settings pages (reCAPTCHA keys, Gmail OAuth credentials).
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel, Text

from ..base import utcnow


class Setting(SQLModel, table=True):
    """
    Setting entity - a single string value under a unique key.

    Secret values (client secrets, refresh tokens) are stored encrypted
    and only decrypted at point of use.
    """

    __tablename__ = "settings"

    key: str = Field(primary_key=True, max_length=100)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
