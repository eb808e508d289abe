"""Plain text rendering options handed wholesale to the core"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


HyperlinkBehavior = Literal["title", "url", "markdown"]
IndentType = Literal["spaces", "tabs"]


class PlainTextOptions(BaseModel):
    """Flat, immutable set of toggles controlling which markup survives."""
    model_config = ConfigDict(frozen=True)

    preserve_superscript:     bool = Field(default=False, description="Keep ^sup^ markers")
    preserve_subscript:       bool = Field(default=False, description="Keep ~sub~ markers")
    preserve_emphasis:        bool = Field(default=False, description="Keep *em* / _em_ markers")
    preserve_bold:            bool = Field(default=False, description="Keep **bold** / __bold__ markers")
    preserve_heading:         bool = Field(default=False, description="Keep leading # on headings")
    preserve_strikethrough:   bool = Field(default=False, description="Keep ~~strike~~ markers")
    preserve_horizontal_rule: bool = Field(default=False, description="Render rules as ---")
    preserve_mark:            bool = Field(default=False, description="Keep ==highlight== markers")
    preserve_insert:          bool = Field(default=False, description="Keep ++insert++ markers")
    display_emojis:           bool = Field(default=True,  description="Emit emoji glyphs")
    hyperlink_behavior: HyperlinkBehavior = Field(default="title", description="title, url or markdown")
    indent_type:        IndentType        = Field(default="spaces", description="spaces (4) or tabs")
