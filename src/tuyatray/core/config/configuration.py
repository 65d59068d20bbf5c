"""Credential configuration value"""

from dataclasses import dataclass
from typing import Any, Dict, List

# JSON key -> attribute name
FIELD_MAP = {
    "baseUrl": "base_url",
    "accessKey": "access_key",
    "secretKey": "secret_key",
    "userId": "user_id",
}


@dataclass(frozen=True)
class Configuration:
    """The four credential fields, replaced wholesale on every save"""

    base_url: str = ""
    access_key: str = ""
    secret_key: str = ""
    user_id: str = ""

    @classmethod
    def default(cls) -> "Configuration":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Configuration":
        """Build from the on-disk JSON object

        Unknown keys are ignored; missing or null keys read as "".
        """
        values = {}
        for json_key, attr in FIELD_MAP.items():
            value = data.get(json_key)
            values[attr] = "" if value is None else str(value)
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return {json_key: getattr(self, attr) for json_key, attr in FIELD_MAP.items()}

    def is_complete(self) -> bool:
        """All four fields present (the only validation performed)"""
        return all(getattr(self, attr) for attr in FIELD_MAP.values())

    def missing_fields(self) -> List[str]:
        return [json_key for json_key, attr in FIELD_MAP.items() if not getattr(self, attr)]

    def __repr__(self) -> str:
        # keep secrets out of log lines
        return (
            f"Configuration(base_url={self.base_url!r}, access_key="
            f"{'***' if self.access_key else ''!r}, secret_key="
            f"{'***' if self.secret_key else ''!r}, user_id={self.user_id!r})"
        )
