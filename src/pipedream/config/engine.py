"""Engine configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from pipedream.domain.model import DEFAULT_MAX_DEPTH, INITIAL_DEPTH, ImageName

from .env import env_int, env_str

MAX_DEPTH_ENV = "PIPEDREAM_MAX_DEPTH"
PRE_IMAGE_ENV = "PIPEDREAM_PRE_IMAGE"
POST_IMAGE_ENV = "PIPEDREAM_POST_IMAGE"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Defaults applied by ``PluginContext`` when rule code does not pass its own."""

    max_depth: int = DEFAULT_MAX_DEPTH
    pre_image_name: str = ImageName.PRE_IMAGE
    post_image_name: str = ImageName.POST_IMAGE


def get_engine_config() -> EngineConfig:
    return EngineConfig(
        max_depth=env_int(MAX_DEPTH_ENV, DEFAULT_MAX_DEPTH, minimum=INITIAL_DEPTH),
        pre_image_name=env_str(PRE_IMAGE_ENV, ImageName.PRE_IMAGE),
        post_image_name=env_str(POST_IMAGE_ENV, ImageName.POST_IMAGE),
    )
