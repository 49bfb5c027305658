"""Settings read from the environment (and a local ``.env`` file)."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

PRODUCTION = "production"


class Settings(BaseModel):
    app_env: str = "development"
    reject_status: int | None = 400  # None hands invalid requests to the view

    @property
    def production(self) -> bool:
        return self.app_env == PRODUCTION


def load_settings() -> Settings:
    load_dotenv()
    reject_status = os.getenv("SWAGGER_VALIDATE_REJECT_STATUS", "400").strip().lower()
    return Settings(
        app_env=os.getenv("APP_ENV", "development").strip().lower(),
        reject_status=None if reject_status in ("", "none", "off") else int(reject_status),
    )
