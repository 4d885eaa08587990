"""Settings for the Todo Gateway"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from gbpcli.settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_TYPE_DEFS = PACKAGE_DIR / "graphql" / "schema.graphql"
DEFAULT_PRISMA_TYPE_DEFS = PACKAGE_DIR / "generated" / "prisma.graphql"
DEFAULT_PORT = 4000


@dataclass(kw_only=True, frozen=True, slots=True)
class Settings(BaseSettings):
    """Todo Gateway Settings

    The Prisma endpoint and secret have no usable defaults. They must come from the
    environment (TODO_GATEWAY_PRISMA_ENDPOINT, TODO_GATEWAY_PRISMA_SECRET).
    """

    # pylint: disable=invalid-name,too-many-instance-attributes
    env_prefix: ClassVar = "TODO_GATEWAY_"

    PRISMA_ENDPOINT: str
    PRISMA_SECRET: str = ""
    PRISMA_TYPE_DEFS: str = str(DEFAULT_PRISMA_TYPE_DEFS)
    PRISMA_DEBUG: bool = False
    PRISMA_TIMEOUT: int = 10  # seconds
    PRISMA_TOKEN_TTL: int = 3600  # seconds

    TYPE_DEFS: str = str(DEFAULT_TYPE_DEFS)
    HOST: str = "localhost"
    PORT: int = DEFAULT_PORT
    DEBUG: bool = False
