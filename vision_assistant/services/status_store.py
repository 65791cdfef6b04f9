import logging
from dataclasses import dataclass, field
from typing import Optional, List

logger = logging.getLogger("vision_assistant")

MAX_LOGS = 200


@dataclass
class StatusStore:
    last_result: Optional[str] = None
    last_error: Optional[str] = None
    logs: List[str] = field(default_factory=list)

    def log(self, msg: str, level: int = logging.INFO):
        logger.log(level, msg)
        self.logs.append(msg)
        if len(self.logs) > MAX_LOGS:
            self.logs = self.logs[-MAX_LOGS:]
