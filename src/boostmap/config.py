from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    digest_algorithm: str = "sha256"
    json_indent: Optional[int] = None
