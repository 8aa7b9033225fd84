"""Discord webhook message models.

These models are the wire contract with the Discord webhook endpoint:
``{"content": str, "embeds": [{color, author?, title, description, fields?,
timestamp?, footer?}, ...]}``. Optional parts that are unset are left out
of the serialized payload entirely.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmbedAuthor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon_url: Optional[str] = None


class EmbedField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    inline: bool = False


class EmbedFooter(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class Embed(BaseModel):
    """A single rich embed block.

    Attributes:
        color: Accent color as a 24-bit RGB integer.
        author: Optional author line with icon.
        title: Embed title.
        description: Markdown body of the embed.
        fields: Optional name/value pairs rendered as a grid.
        timestamp: Optional ISO-8601 timestamp shown in the footer line.
        footer: Optional footer text.
    """

    model_config = ConfigDict(frozen=True)

    color: int = Field(..., ge=0, le=0xFFFFFF)
    author: Optional[EmbedAuthor] = None
    title: str
    description: str
    fields: Optional[List[EmbedField]] = None
    timestamp: Optional[str] = None
    footer: Optional[EmbedFooter] = None


class ChatMessage(BaseModel):
    """A Discord webhook message: top-level text plus ordered embeds."""

    model_config = ConfigDict(frozen=True)

    content: str
    embeds: List[Embed] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON body Discord expects."""
        return self.model_dump(mode="json", exclude_none=True)
