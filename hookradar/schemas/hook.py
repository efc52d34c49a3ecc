# hookradar/schemas/hook.py
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class HookInput:
    framework: str
    hook_type: str
    raw_data: Dict[str, Any] = field(default_factory=dict)

    @property
    def session_id(self) -> str:
        sid = self.raw_data.get("session_id")
        return sid if isinstance(sid, str) else ""
