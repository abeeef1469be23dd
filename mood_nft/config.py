"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .encoder import svg_to_image_uri


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="MOOD_NFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    collection_name: str = "Mood NFT"
    collection_symbol: str = "MN"

    # Image references; an SVG file path takes precedence over the URI
    sad_image_uri: str = "ipfs://sad"
    happy_image_uri: str = "ipfs://happy"
    sad_svg_path: Path | None = None
    happy_svg_path: Path | None = None

    # Record the initial mood under the post-increment counter (legacy)
    record_under_next_id: bool = False

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    def resolve_image_uris(self) -> tuple[str, str]:
        """Return the (sad, happy) image URIs, reading SVG files if configured."""
        sad = self.sad_image_uri
        happy = self.happy_image_uri
        if self.sad_svg_path is not None:
            sad = svg_to_image_uri(self.sad_svg_path.read_text(encoding="utf-8"))
        if self.happy_svg_path is not None:
            happy = svg_to_image_uri(self.happy_svg_path.read_text(encoding="utf-8"))
        return sad, happy
