"""
Settings of the controller.

Defaults suit a game service running locally. Everything can be overridden from the environment (see `from_env`).
"""

import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, Field, ValidationError

from src.core.exceptions import ConfigurationError
from src.core.shared_types import EngineAssignment

ENV_PREFIX = "CHESS_"


class ControllerSettings(BaseModel):
    base_url: str = "http://localhost:8000"
    request_timeout: float = Field(10.0, gt=0)
    use_turn_endpoint: bool = True
    game_id: Optional[int] = Field(None, ge=0)
    remove_game_on_close: bool = False
    engine_assignment: EngineAssignment = EngineAssignment.NONE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """
        Read CHESS_SERVICE_URL, CHESS_REQUEST_TIMEOUT, CHESS_GAME_ID, CHESS_ENGINE_COLOR,
        CHESS_USE_TURN_ENDPOINT and CHESS_REMOVE_GAME_ON_CLOSE. Missing variables keep their default.
        """
        environ = os.environ if environ is None else environ
        env_to_field = {
            "SERVICE_URL": "base_url",
            "REQUEST_TIMEOUT": "request_timeout",
            "GAME_ID": "game_id",
            "ENGINE_COLOR": "engine_assignment",
            "USE_TURN_ENDPOINT": "use_turn_endpoint",
            "REMOVE_GAME_ON_CLOSE": "remove_game_on_close",
        }
        raw = {
            field: environ[f"{ENV_PREFIX}{name}"]
            for name, field in env_to_field.items()
            if f"{ENV_PREFIX}{name}" in environ
        }
        try:
            return cls(**raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
