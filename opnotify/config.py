from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "opnotify"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # Outbound HTTP timeout in seconds. None disables the timeout entirely.
    http_timeout: Optional[float] = None

    # 0 = unbounded queue; otherwise producers wait for free slots
    queue_maxsize: int = 0

    # Message presentation
    title_text: str = "Operator reconciled."
    footer_text: str = "Powered by Jenkins Operator <3"

    # Mailgun
    mailgun_api_base: str = "https://api.mailgun.net"

    model_config = {"env_prefix": "OPNOTIFY_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
