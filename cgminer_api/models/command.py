"""Command sent to the daemon."""
import json
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class APICommand:
    """API method plus an optional single parameter (e.g. a device index)."""
    method: str
    parameter: str = ""

    def __post_init__(self):
        if not self.method:
            raise ValueError("Command method is required")

    def to_dict(self) -> Dict[str, str]:
        # Some daemons treat a present-but-empty parameter as significant
        cmd = {"command": self.method}
        if self.parameter:
            cmd["parameter"] = self.parameter
        return cmd

    def encode(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")
