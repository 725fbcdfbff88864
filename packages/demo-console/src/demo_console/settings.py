"""Environment-based configuration for the demo console."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Demo console configuration.

    All settings can be overridden via environment variables with
    DEMO_CONSOLE_ prefix. For example:
        DEMO_CONSOLE_SCROLL_DELAY_MS=0
        DEMO_CONSOLE_LOG_LEVEL=DEBUG
    """

    # Deferral between a log update and the scroll to its end
    scroll_delay_ms: int = Field(default=50, ge=0)

    # Live display refresh rate
    refresh_per_second: float = Field(default=4.0, gt=0)

    # Developer logging (not the console log)
    log_level: str = "WARNING"

    default_catalog: str = "references"

    model_config = {"env_prefix": "DEMO_CONSOLE_"}

    @property
    def scroll_delay(self) -> float:
        """Scroll deferral in seconds."""
        return self.scroll_delay_ms / 1000
